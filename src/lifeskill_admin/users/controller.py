from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import validate_payload
from ..container import Container
from .schemas import CreateUserBody, DeviceTokenBody, UserParams


def register(app: Flask, container: Container) -> None:
    @app.route("/v1/users", methods=["POST"], endpoint="create_user")
    def create_user():
        body = validate_payload(CreateUserBody, request.get_json(silent=True))
        user = container.user_service.create_account(
            username=body.username,
            password=body.password,
            role=body.role,
            first_name=body.first_name,
            last_name=body.last_name,
            mob_number=body.mob_number,
            device_token=body.device_token,
        )
        return jsonify(user.to_dict()), 201

    @app.route("/v1/users/<int:user_id>", methods=["GET"], endpoint="get_user")
    def get_user(user_id: int):
        params = validate_payload(UserParams, {"user_id": user_id})
        return jsonify(container.user_service.get_user(params.user_id).to_dict())

    @app.route("/v1/users/<int:user_id>/device-token", methods=["PATCH"], endpoint="set_device_token")
    def set_device_token(user_id: int):
        params = validate_payload(UserParams, {"user_id": user_id})
        body = validate_payload(DeviceTokenBody, request.get_json(silent=True))
        user = container.user_service.set_device_token(params.user_id, body.device_token)
        return jsonify(user.to_dict())
