from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

import firebase_admin
from firebase_admin import credentials, exceptions, messaging

from ..core.exceptions import NotificationError

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "lifeskill-admin"


class PushNotifier(Protocol):
    def send_message(self, device_token: str, title: str, body: str) -> None:
        raise NotImplementedError


class FcmPushNotifier:
    """Send a notification to one device through Firebase Cloud Messaging."""

    def __init__(self, *, app: Optional[firebase_admin.App] = None, send: Optional[Callable] = None):
        self._app = app
        self._send = send or messaging.send

    def send_message(self, device_token: str, title: str, body: str) -> None:
        message = messaging.Message(
            notification=messaging.Notification(title=title, body=body),
            token=device_token,
        )
        try:
            message_id = self._send(message, app=self._app)
        except (exceptions.FirebaseError, ValueError) as e:
            raise NotificationError(f"Push notification failed: {e}") from e
        logger.debug("push %s sent to %s...", message_id, device_token[:8])


class LoggingPushNotifier:
    """Fallback when no Firebase credentials are configured."""

    def send_message(self, device_token: str, title: str, body: str) -> None:
        logger.info("push (not configured) token=%s... title=%r body=%r", device_token[:8], title, body)


def firebase_app(credentials_file: str) -> firebase_admin.App:
    """The named Firebase app, initialised once from a service-account file."""

    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        return firebase_admin.initialize_app(credentials.Certificate(credentials_file), name=FIREBASE_APP_NAME)


def build_notifier(settings) -> PushNotifier:
    credentials_file = getattr(settings, "FCM_CREDENTIALS_FILE", "")
    if credentials_file:
        return FcmPushNotifier(app=firebase_app(credentials_file))
    return LoggingPushNotifier()
