from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.schemas import PageQuery
from ..common.validators import validate_payload
from ..container import Container
from ..core.exceptions import ValidationError

_PAGE_KEYS = {"sortBy", "limit", "page"}


def register(app: Flask, container: Container) -> None:
    @app.route("/v1/statistics", methods=["POST"], endpoint="create_statistic")
    def create_statistic():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError('"body" must be an object')
        return jsonify(container.statistic_service.create_statistic(body).to_dict()), 201

    @app.route("/v1/statistics", methods=["GET"], endpoint="query_statistics")
    def query_statistics():
        args = request.args.to_dict()
        page = validate_payload(PageQuery, {k: v for k, v in args.items() if k in _PAGE_KEYS})
        filters = {k: v for k, v in args.items() if k not in _PAGE_KEYS}
        result = container.statistic_service.query_statistics(filters=filters, options=page.page_options())
        return jsonify(result.map(lambda s: s.to_dict()).to_dict())
