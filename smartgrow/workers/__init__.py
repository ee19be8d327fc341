"""
Workers module for background tasks.

This module contains:
- refresh_scheduler: periodic notification refresh loop
- notifications_cli: one-shot evaluation from the command line
"""

__all__ = ["RefreshScheduler"]

from smartgrow.workers.refresh_scheduler import RefreshScheduler
