from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import validate_payload
from ..container import Container
from .schemas import (
    ScheduleVisitBody,
    SchoolVisitsParams,
    TrainerParams,
    TrainerVisitsQuery,
    UpdateVisitBody,
    UpdateVisitParams,
    VisitListQuery,
    VisitParams,
)


def register(app: Flask, container: Container) -> None:
    @app.route("/v1/visits", methods=["POST"], endpoint="schedule_visit")
    def schedule_visit():
        body = validate_payload(ScheduleVisitBody, request.get_json(silent=True))
        visit = container.visit_service.schedule_visit(
            trainer_id=body.trainer_id,
            school_id=body.school_id,
            visit_date=body.visit_date,
            time=body.time,
            standard=body.standard,
        )
        return jsonify(visit.to_dict()), 201

    @app.route("/v1/visits", methods=["GET"], endpoint="trainer_visits")
    def trainer_visits():
        query = validate_payload(TrainerVisitsQuery, request.args.to_dict())
        return jsonify(container.visit_service.get_trainer_visits(query.trainer_id, query.status))

    @app.route("/v1/visits/list", methods=["GET"], endpoint="query_visits")
    def query_visits():
        query = validate_payload(VisitListQuery, request.args.to_dict())
        result = container.visit_service.query_visits(
            filters=query.model_dump(include={"trainer_id", "school_id", "status"}, exclude_none=True),
            options=query.page_options(),
        )
        return jsonify(result.map(lambda v: v.to_dict()).to_dict())

    @app.route("/v1/visits/<int:visit_id>", methods=["GET"], endpoint="get_visit")
    def get_visit(visit_id: int):
        params = validate_payload(VisitParams, {"visit_id": visit_id})
        return jsonify(container.visit_service.get_visit(params.visit_id).to_dict())

    @app.route("/v1/visits/school/<school_id>", methods=["GET"], endpoint="school_visits")
    def school_visits(school_id: str):
        params = validate_payload(SchoolVisitsParams, {"school_id": school_id})
        return jsonify(container.visit_service.get_visits_by_school(params.school_id))

    @app.route("/v1/visits/trainer/<int:trainer_id>/summary", methods=["GET"], endpoint="trainer_summary")
    def trainer_summary(trainer_id: int):
        params = validate_payload(TrainerParams, {"trainer_id": trainer_id})
        return jsonify(container.visit_service.get_trainer_summary(params.trainer_id))

    @app.route("/v1/visits/<school_id>/<int:trainer_id>", methods=["PATCH"], endpoint="update_visit")
    def update_visit(school_id: str, trainer_id: int):
        params = validate_payload(UpdateVisitParams, {"school_id": school_id, "trainer_id": trainer_id})
        body = validate_payload(UpdateVisitBody, request.get_json(silent=True))
        visit = container.visit_service.update_visit(
            school_id=params.school_id,
            trainer_id=params.trainer_id,
            update_body=body.model_dump(exclude_unset=True),
        )
        return jsonify(visit.to_dict())

    @app.route("/v1/visits/<int:visit_id>", methods=["DELETE"], endpoint="delete_visit")
    def delete_visit(visit_id: int):
        params = validate_payload(VisitParams, {"visit_id": visit_id})
        return jsonify(container.visit_service.delete_visit(params.visit_id).to_dict())
