from dataclasses import replace

from conftest import SNAPSHOT_TIME, ZONE1, make_plant
from smartgrow.domain.thresholds import ThresholdRange
from smartgrow.enums.notifications import SensorChannel
from smartgrow.services.application.stats_aggregator import aggregate


def test_two_critical_three_warning_all_unread(builder):
    critical = [
        builder.build_environmental(
            SensorChannel.AIR_QUALITY, 600, ThresholdRange(0, 100), ZONE1, make_plant(f"c{i}"), SNAPSHOT_TIME
        )
        for i in range(2)
    ]
    warning = [
        builder.build_environmental(
            SensorChannel.LIGHT, 15, ThresholdRange(20, 90), ZONE1, make_plant(f"w{i}"), SNAPSHOT_TIME
        )
        for i in range(3)
    ]

    stats = aggregate(critical + warning)

    assert stats.to_dict() == {"total": 5, "critical": 2, "warning": 3, "unread": 5}


def test_read_notifications_are_not_unread(builder):
    notification = builder.build_no_sensor_data(ZONE1, make_plant(), SNAPSHOT_TIME)

    stats = aggregate([notification, replace(notification, is_read=True)])

    assert stats.total == 2
    assert stats.unread == 1


def test_empty_list():
    assert aggregate([]).to_dict() == {"total": 0, "critical": 0, "warning": 0, "unread": 0}
