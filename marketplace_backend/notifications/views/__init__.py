from .inbox import NotificationViewSet

__all__ = ["NotificationViewSet"]
