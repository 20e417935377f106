from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.uploads import uploaded_sheet
from ..common.validators import validate_payload
from ..container import Container
from ..core.exceptions import NotFoundError
from .schemas import BulkStudentsBody, CreateStudentBody, StudentParams, StudentQuery, UpdateStudentBody


def register(app: Flask, container: Container) -> None:
    @app.route("/v1/students", methods=["POST"], endpoint="create_student")
    def create_student():
        body = validate_payload(CreateStudentBody, request.get_json(silent=True))
        student = container.student_service.create_student(body.to_new_student())
        return jsonify(student.to_dict()), 201

    @app.route("/v1/students", methods=["GET"], endpoint="query_students")
    def query_students():
        query = validate_payload(StudentQuery, request.args.to_dict())
        result = container.student_service.query_students(
            filters=query.model_dump(include={"name", "school_id"}, exclude_none=True),
            options=query.page_options(),
        )
        return jsonify(result.map(lambda s: s.to_dict()).to_dict())

    @app.route("/v1/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    def get_student(student_id: int):
        params = validate_payload(StudentParams, {"student_id": student_id})
        return jsonify(container.student_service.get_student(params.student_id).to_dict())

    @app.route("/v1/students/<int:student_id>", methods=["PATCH"], endpoint="update_student")
    def update_student(student_id: int):
        params = validate_payload(StudentParams, {"student_id": student_id})
        body = validate_payload(UpdateStudentBody, request.get_json(silent=True))
        student = container.student_service.update_student(params.student_id, body.model_dump(exclude_unset=True))
        return jsonify(student.to_dict())

    @app.route("/v1/students/bulk-upload", methods=["POST"], endpoint="bulk_upload_students")
    def bulk_upload_students():
        with uploaded_sheet(request.files.get("file")) as path:
            if path:
                return jsonify(container.student_service.bulk_upload(file_path=str(path))), 201

        body = validate_payload(BulkStudentsBody, request.get_json(silent=True))
        if not body.students:
            raise NotFoundError("Missing file")
        return jsonify(container.student_service.bulk_upload(body.students)), 201
