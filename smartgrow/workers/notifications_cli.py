from __future__ import annotations

import argparse
import json
import logging

from smartgrow.config import load_config, setup_logging
from smartgrow.domain.exceptions import SmartGrowError
from smartgrow.services.container import ServiceContainer

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Run one notification evaluation and print the result as JSON."""
    parser = argparse.ArgumentParser(prog="smartgrow-notifications")
    parser.add_argument(
        "--concurrent",
        action="store_true",
        help="Evaluate the zones in parallel (default: sequential)",
    )
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    args = parser.parse_args(argv)

    config = load_config()
    if args.concurrent:
        config.zone_workers = 4
    setup_logging(debug=config.DEBUG, log_path=config.log_path)

    container = ServiceContainer.build(config)
    try:
        run = container.engine.run()
    except SmartGrowError as e:
        logger.error("Evaluation failed: %s", e)
        return 1
    finally:
        container.shutdown()

    output = {
        "notifications": [notification.to_dict() for notification in run.notifications],
        "stats": run.stats.to_dict(),
        "systemThresholds": run.system_thresholds.to_dict(),
        "thresholdsDefaulted": run.thresholds_defaulted,
        "zoneErrors": run.zone_errors,
        "durationSeconds": round(run.duration_seconds, 3),
    }
    print(json.dumps(output, indent=2 if args.pretty else None, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
