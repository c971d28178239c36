"""User-visible notifications and their permission state"""
import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class NotificationPermission(str, Enum):
    """Host permission to show notifications"""
    UNSET = "unset"
    GRANTED = "granted"
    DENIED = "denied"


class Notifier:
    """
    Base notifier.

    Subclasses bind to a real host (desktop, browser bridge, push service) by
    overriding ``_prompt`` and ``_show``.
    """

    def __init__(self, permission: NotificationPermission = NotificationPermission.UNSET):
        self._permission = permission

    @property
    def permission(self) -> NotificationPermission:
        return self._permission

    def request_permission(self) -> NotificationPermission:
        """Ask the host once; an answered prompt is never repeated"""
        if self._permission is NotificationPermission.UNSET:
            self._permission = self._prompt()
            logger.info(f"Notification permission: {self._permission.value}")
        return self._permission

    def notify(self, title: str, body: str) -> bool:
        """
        Show a notification if permission is granted.

        Returns:
            True if the notification was handed to the host
        """
        if self._permission is not NotificationPermission.GRANTED:
            return False
        self._show(title, body)
        return True

    def _prompt(self) -> NotificationPermission:
        raise NotImplementedError

    def _show(self, title: str, body: str) -> None:
        raise NotImplementedError


class LogNotifier(Notifier):
    """
    Notifier that writes notifications to the log.

    Grants permission on request unless ``answer`` says otherwise.
    """

    def __init__(
        self,
        permission: NotificationPermission = NotificationPermission.UNSET,
        answer: Optional[NotificationPermission] = NotificationPermission.GRANTED,
    ):
        super().__init__(permission)
        self._answer = answer or NotificationPermission.DENIED

    def _prompt(self) -> NotificationPermission:
        return self._answer

    def _show(self, title: str, body: str) -> None:
        logger.info(f"[notification] {title} {body}")
