"""Flask server for the SmartGrow notification service.

Usage::

    python run_server.py                  # 0.0.0.0:8000, scheduler on
    SMARTGROW_PORT=5000 python run_server.py
"""

from __future__ import annotations

import logging
import os
import sys

from smartgrow import create_app


def main() -> int:
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")

    host = os.getenv("SMARTGROW_HOST", "0.0.0.0")
    port = int(os.getenv("SMARTGROW_PORT", "8000"))

    app = create_app(start_scheduler=True)
    logging.info("Starting server on http://%s:%s", host, port)

    try:
        app.run(host=host, port=port, debug=app.config.get("DEBUG", False), use_reloader=False)
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
