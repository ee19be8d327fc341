import pytest

from smartgrow.domain.exceptions import ConfigError
from smartgrow.domain.plant import Zone
from smartgrow.domain.thresholds import SystemThresholds, ThresholdRange


def test_contains_is_inclusive():
    band = ThresholdRange(30, 70)
    assert band.contains(30)
    assert band.contains(70)
    assert not band.contains(29.99)
    assert not band.contains(70.01)
    assert band.is_below(29)
    assert not band.is_below(71)


@pytest.mark.parametrize("low, high", [(70, 30), (50, 50), (None, 10), (0, None)])
def test_invalid_ranges_raise_config_error(low, high):
    with pytest.raises(ConfigError):
        ThresholdRange(low, high)


def test_system_defaults():
    assert SystemThresholds.defaults().to_dict() == {
        "light": {"min": 0, "max": 200},
        "temperature": {"min": 20, "max": 30},
        "airQuality": {"min": 0, "max": 100},
    }


def test_known_zones_in_order():
    zones = Zone.known()
    assert [z.id for z in zones] == ["zone1", "zone2", "zone3", "zone4"]
    assert Zone.display_name_for("zone3") == "Zone 3"
    assert Zone.display_name_for("greenhouse") == "greenhouse"
