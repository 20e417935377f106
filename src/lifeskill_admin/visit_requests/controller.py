from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import validate_payload
from ..container import Container
from .schemas import CreateVisitRequestBody, VisitRequestQuery


def register(app: Flask, container: Container) -> None:
    @app.route("/v1/visit-requests", methods=["POST"], endpoint="create_visit_request")
    def create_visit_request():
        body = validate_payload(CreateVisitRequestBody, request.get_json(silent=True))
        created = container.visit_request_service.create_request(body.to_new_request())
        return jsonify(created.to_dict()), 201

    @app.route("/v1/visit-requests", methods=["GET"], endpoint="query_visit_requests")
    def query_visit_requests():
        query = validate_payload(VisitRequestQuery, request.args.to_dict())
        result = container.visit_request_service.query_requests(
            filters=query.model_dump(include={"kind", "school_id"}, exclude_none=True),
            options=query.page_options(),
        )
        return jsonify(result.map(lambda r: r.to_dict()).to_dict())
