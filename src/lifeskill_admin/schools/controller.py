from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.uploads import uploaded_sheet
from ..common.validators import validate_payload
from ..container import Container
from .schemas import (
    BlockQuery,
    BlockSchoolsQuery,
    BulkSchoolsBody,
    CreateSchoolBody,
    SchoolParams,
    SchoolQuery,
    UpdateSchoolBody,
)


def register(app: Flask, container: Container) -> None:
    @app.route("/v1/schools", methods=["POST"], endpoint="create_school")
    def create_school():
        body = validate_payload(CreateSchoolBody, request.get_json(silent=True))
        school = container.school_service.create_school(body.record())
        return jsonify(school.to_dict()), 201

    @app.route("/v1/schools", methods=["GET"], endpoint="query_schools")
    def query_schools():
        query = validate_payload(SchoolQuery, request.args.to_dict())
        result = container.school_service.query_schools(
            filters=query.model_dump(include={"name", "district", "block"}, exclude_none=True),
            options=query.page_options(),
        )
        return jsonify(result.map(lambda s: s.to_dict()).to_dict())

    @app.route("/v1/schools/blocks", methods=["GET"], endpoint="list_blocks")
    def list_blocks():
        query = validate_payload(BlockQuery, request.args.to_dict())
        return jsonify(list(container.school_service.list_blocks(district=query.district)))

    @app.route("/v1/schools/by-block", methods=["GET"], endpoint="list_schools_in_block")
    def list_schools_in_block():
        query = validate_payload(BlockSchoolsQuery, request.args.to_dict())
        return jsonify(list(container.school_service.list_schools_in_block(query.block)))

    @app.route("/v1/schools/<school_id>", methods=["GET"], endpoint="get_school")
    def get_school(school_id: str):
        params = validate_payload(SchoolParams, {"school_id": school_id})
        return jsonify(container.school_service.get_school(params.school_id).to_dict())

    @app.route("/v1/schools/<school_id>", methods=["PATCH"], endpoint="update_school")
    def update_school(school_id: str):
        params = validate_payload(SchoolParams, {"school_id": school_id})
        body = validate_payload(UpdateSchoolBody, request.get_json(silent=True))
        school = container.school_service.update_school(params.school_id, body.model_dump(exclude_unset=True))
        return jsonify(school.to_dict())

    @app.route("/v1/schools/bulk-upload", methods=["POST"], endpoint="bulk_upload_schools")
    def bulk_upload_schools():
        with uploaded_sheet(request.files.get("file")) as path:
            if path:
                result = container.school_service.bulk_upload(None, file_path=str(path))
            else:
                body = validate_payload(BulkSchoolsBody, request.get_json(silent=True))
                rows = [row.model_dump() for row in body.schools]
                result = container.school_service.bulk_upload(rows)

        if result.get("error"):
            return jsonify(result), 400
        return jsonify(result), 201
