from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .core.constants import DEFAULT_BULK_UPLOAD_WORKERS, DEFAULT_SCHOOL_ID_ATTEMPTS, DEFAULT_SCHOOL_PASSWORD
from .database.connection import DatabaseConnection
from .notifications.push import PushNotifier, build_notifier
from .schools.mysql_school_repository import MySQLSchoolRepository
from .schools.service import SchoolService
from .statistics.mysql_statistic_repository import MySQLStatisticRepository
from .statistics.service import StatisticService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import UserService
from .visit_requests.mysql_visit_request_repository import MySQLVisitRequestRepository
from .visit_requests.service import VisitRequestService
from .visits.mysql_visit_repository import MySQLVisitRepository
from .visits.service import VisitService


@dataclass(frozen=True)
class Container:
    conn: Any

    users_repo: Any
    schools_repo: Any
    students_repo: Any
    visits_repo: Any
    statistics_repo: Any
    visit_requests_repo: Any
    notifier: PushNotifier

    user_service: UserService
    school_service: SchoolService
    student_service: StudentService
    visit_service: VisitService
    statistic_service: StatisticService
    visit_request_service: VisitRequestService


def wire(
    *,
    conn: Any,
    users_repo,
    schools_repo,
    students_repo,
    visits_repo,
    statistics_repo,
    visit_requests_repo,
    notifier: PushNotifier,
    settings: Any = None,
) -> Container:
    """Build services on top of the given repositories.

    Tests pass in-memory repositories here; ``build_container`` passes MySQL ones.
    """

    school_service = SchoolService(
        schools_repo,
        default_password=getattr(settings, "DEFAULT_SCHOOL_PASSWORD", DEFAULT_SCHOOL_PASSWORD),
        id_attempts=int(getattr(settings, "SCHOOL_ID_MAX_ATTEMPTS", DEFAULT_SCHOOL_ID_ATTEMPTS)),
        bulk_workers=int(getattr(settings, "BULK_UPLOAD_WORKERS", DEFAULT_BULK_UPLOAD_WORKERS)),
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        schools_repo=schools_repo,
        students_repo=students_repo,
        visits_repo=visits_repo,
        statistics_repo=statistics_repo,
        visit_requests_repo=visit_requests_repo,
        notifier=notifier,
        user_service=UserService(users_repo),
        school_service=school_service,
        student_service=StudentService(students_repo, schools_repo),
        visit_service=VisitService(visits_repo, users_repo, schools_repo, students_repo, notifier),
        statistic_service=StatisticService(statistics_repo),
        visit_request_service=VisitRequestService(visit_requests_repo, schools_repo),
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.from_settings(db_config)
    return wire(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        schools_repo=MySQLSchoolRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        visits_repo=MySQLVisitRepository(conn),
        statistics_repo=MySQLStatisticRepository(conn),
        visit_requests_repo=MySQLVisitRequestRepository(conn),
        notifier=build_notifier(settings),
        settings=settings,
    )
