from __future__ import annotations

from types import SimpleNamespace

import pytest
from firebase_admin import exceptions

from lifeskill_admin.core.exceptions import NotificationError
from lifeskill_admin.notifications import push
from lifeskill_admin.notifications.push import FcmPushNotifier, LoggingPushNotifier, build_notifier


class FakeSend:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple] = []

    def __call__(self, message, app=None):
        self.calls.append((message, app))
        if self.error:
            raise self.error
        return "projects/demo/messages/1"


def test_fcm_notifier_sends_token_message():
    send = FakeSend()
    app = object()
    notifier = FcmPushNotifier(app=app, send=send)

    notifier.send_message("token-123456789", "Visits", "hello")

    message, used_app = send.calls[0]
    assert used_app is app
    assert message.token == "token-123456789"
    assert message.notification.title == "Visits"
    assert message.notification.body == "hello"


def test_fcm_notifier_wraps_firebase_errors():
    notifier = FcmPushNotifier(send=FakeSend(exceptions.UnavailableError("fcm down")))

    with pytest.raises(NotificationError, match="fcm down"):
        notifier.send_message("token-123456789", "Visits", "hello")


def test_fcm_notifier_wraps_invalid_token_errors():
    notifier = FcmPushNotifier(send=FakeSend(ValueError("bad token")))

    with pytest.raises(NotificationError):
        notifier.send_message("", "Visits", "hello")


def test_build_notifier_falls_back_to_logging():
    assert isinstance(build_notifier(SimpleNamespace(FCM_CREDENTIALS_FILE="")), LoggingPushNotifier)
    assert isinstance(build_notifier(SimpleNamespace()), LoggingPushNotifier)


def test_build_notifier_uses_firebase_when_credentials_are_set(monkeypatch):
    seen = []
    monkeypatch.setattr(push, "firebase_app", lambda path: seen.append(path) or object())

    notifier = build_notifier(SimpleNamespace(FCM_CREDENTIALS_FILE="/secrets/firebase.json"))

    assert isinstance(notifier, FcmPushNotifier)
    assert seen == ["/secrets/firebase.json"]
