from smartgrow.blueprints.api.notifications import notifications_api

__all__ = ["notifications_api"]
