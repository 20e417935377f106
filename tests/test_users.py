from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from lifeskill_admin.core.enums import Role
from lifeskill_admin.core.exceptions import ConflictError, ValidationError
from lifeskill_admin.users.service import UserService


def test_create_account_hashes_password(users):
    service = UserService(users)

    user = service.create_account(username="trainer1", password="secret1", role=Role.TRAINER)

    assert user.role == Role.TRAINER
    assert check_password_hash(users.get_by_id(user.user_id).password_hash, "secret1")


def test_duplicate_username_conflicts(users):
    service = UserService(users)
    service.create_account(username="trainer1", password="secret1", role=Role.TRAINER)

    with pytest.raises(ConflictError):
        service.create_account(username="trainer1", password="secret2", role=Role.TRAINER)


def test_short_password_is_rejected(users):
    with pytest.raises(ValidationError):
        UserService(users).create_account(username="trainer1", password="123", role=Role.TRAINER)


def test_device_token_route(client, users):
    trainer = users.add("t1")

    resp = client.patch(f"/v1/users/{trainer.user_id}/device-token", json={"deviceToken": "abc"})

    assert resp.status_code == 200
    assert users.get_by_id(trainer.user_id).device_token == "abc"


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}
