from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from lifeskill_admin.common.pagination import PageOptions, QueryResult
from lifeskill_admin.container import wire
from lifeskill_admin.core.enums import Role, VisitStatus
from lifeskill_admin.core.exceptions import DuplicateRecordError
from lifeskill_admin.main import create_app
from lifeskill_admin.schools.model import NewSchool, School, SchoolAccount
from lifeskill_admin.statistics.model import Statistic
from lifeskill_admin.students.model import NewStudent, Student
from lifeskill_admin.users.model import User
from lifeskill_admin.visit_requests.model import NewVisitRequest, VisitRequest
from lifeskill_admin.visits.model import Visit


def _page(items: list, options: PageOptions) -> QueryResult:
    return QueryResult(
        results=items[options.offset : options.offset + options.limit],
        page=options.page,
        limit=options.limit,
        total_results=len(items),
    )


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}
        self._id = 0

    def add(self, username: str, role: Role = Role.TRAINER, **kw) -> User:
        user_id = self.create_user(
            first_name=kw.get("first_name"),
            last_name=kw.get("last_name"),
            mob_number=kw.get("mob_number"),
            username=username,
            password_hash="x",
            role=role,
            device_token=kw.get("device_token"),
        )
        return self.by_id[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.username == username), None)

    def create_user(self, *, first_name, last_name, mob_number, username, password_hash, role, device_token=None) -> int:
        self._id += 1
        self.by_id[self._id] = User(
            user_id=self._id,
            first_name=first_name,
            last_name=last_name,
            mob_number=mob_number,
            username=username,
            password_hash=password_hash,
            role=role,
            device_token=device_token,
        )
        return self._id

    def set_device_token(self, user_id: int, device_token: Optional[str]) -> bool:
        if user_id not in self.by_id:
            return False
        self.by_id[user_id] = replace(self.by_id[user_id], device_token=device_token)
        return True


class InMemorySchools:
    """Enforces the same unique keys as the schools/users tables."""

    def __init__(self, users: Optional[InMemoryUsers] = None):
        self.by_school_id: dict[str, School] = {}
        self.accounts: list[SchoolAccount] = []
        self.usernames: set[str] = set()
        self._users = users
        self._id = 0
        self._lock = threading.Lock()

    def add(self, school_id: str, name: str = "School", **fields) -> School:
        return self.create_with_account(
            school=NewSchool(school_id=school_id, name=name, **fields),
            account=SchoolAccount(username=school_id, password_hash="x"),
        )

    def get_by_school_id(self, school_id: str) -> Optional[School]:
        return self.by_school_id.get(school_id)

    def get_by_udisecode(self, udisecode: str) -> Optional[School]:
        return next((s for s in self.by_school_id.values() if udisecode and s.udisecode == udisecode), None)

    def create_with_account(self, *, school: NewSchool, account: SchoolAccount) -> School:
        with self._lock:
            if school.school_id in self.by_school_id:
                raise DuplicateRecordError("duplicate", key="uq_schools_school_id")
            if account.username in self.usernames:
                raise DuplicateRecordError("duplicate", key="uq_users_username")
            if school.udisecode and self.get_by_udisecode(school.udisecode):
                raise DuplicateRecordError("duplicate", key="uq_schools_udisecode")
            self._id += 1
            created = School(id=self._id, **vars(school))
            self.by_school_id[school.school_id] = created
            self.accounts.append(account)
            self.usernames.add(account.username)
            return created

    def update(self, school_id: str, fields: dict) -> Optional[School]:
        school = self.by_school_id.get(school_id)
        if not school:
            return None
        self.by_school_id[school_id] = replace(school, **fields)
        return self.by_school_id[school_id]

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        items = [
            s
            for s in self.by_school_id.values()
            if all(getattr(s, k) == v for k, v in filters.items() if k != "name")
            and filters.get("name", "").lower() in (s.name or "").lower()
        ]
        return _page(items, options)

    def list_blocks(self, *, district: Optional[str] = None):
        return sorted({s.block for s in self.by_school_id.values() if s.block and (not district or s.district == district)})

    def list_in_block(self, block: str):
        return [{"schoolId": s.school_id, "name": s.name} for s in self.by_school_id.values() if s.block == block]


class InMemoryStudents:
    def __init__(self):
        self.by_id: dict[int, Student] = {}
        self._id = 0

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.by_id.get(student_id)

    def create(self, student: NewStudent) -> int:
        self._id += 1
        self.by_id[self._id] = Student(student_id=self._id, created_at=datetime(2024, 1, 1), **vars(student))
        return self._id

    def create_many(self, students) -> int:
        for s in students:
            self.create(s)
        return len(students)

    def update(self, student_id: int, fields: dict) -> Optional[Student]:
        if student_id not in self.by_id:
            return None
        self.by_id[student_id] = replace(self.by_id[student_id], **fields)
        return self.by_id[student_id]

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        items = [s for s in self.by_id.values() if all(getattr(s, k) == v for k, v in filters.items())]
        return _page(items, options)

    def count_for_schools(self, school_ids) -> int:
        wanted = set(school_ids)
        return sum(1 for s in self.by_id.values() if s.school_id in wanted)


class InMemoryVisits:
    """Keeps the trainer's ``visits`` list in step with inserts and deletes."""

    def __init__(self, users: InMemoryUsers, schools: InMemorySchools):
        self.by_id: dict[int, Visit] = {}
        self._users = users
        self._schools = schools
        self._id = 0

    def get_by_id(self, visit_id: int) -> Optional[Visit]:
        return self.by_id.get(visit_id)

    def find_slot(self, *, trainer_id, school_id, visit_date, time) -> Optional[Visit]:
        return next(
            (
                v
                for v in self.by_id.values()
                if (v.trainer_id, v.school_id, v.visit_date, v.time) == (trainer_id, school_id, visit_date, time)
            ),
            None,
        )

    def find_for_school_and_trainer(self, *, school_id, trainer_id) -> Optional[Visit]:
        mine = [v for v in self.by_id.values() if v.school_id == school_id and v.trainer_id == trainer_id]
        open_ = sorted((v for v in mine if v.status != VisitStatus.COMPLETED), key=lambda v: (v.visit_date, v.time))
        if open_:
            return open_[0]
        done = sorted(mine, key=lambda v: (v.visit_date, v.time), reverse=True)
        return done[0] if done else None

    def create_for_trainer(self, *, trainer_id, school_id, visit_date, time, standard=None) -> Visit:
        if self.find_slot(trainer_id=trainer_id, school_id=school_id, visit_date=visit_date, time=time):
            raise DuplicateRecordError("duplicate", key="uq_visits_slot")
        self._id += 1
        visit = Visit(
            visit_id=self._id,
            trainer_id=trainer_id,
            school_id=school_id,
            visit_date=visit_date,
            time=time,
            standard=standard,
            created_at=datetime(2024, 1, 1, 9, 0),
        )
        self.by_id[self._id] = visit
        trainer = self._users.by_id[trainer_id]
        self._users.by_id[trainer_id] = replace(trainer, visits=trainer.visits + (self._id,))
        return visit

    def save(self, visit: Visit) -> Visit:
        self.by_id[visit.visit_id] = visit
        return visit

    def delete_for_trainer(self, *, visit_id, trainer_id) -> bool:
        trainer = self._users.by_id[trainer_id]
        self._users.by_id[trainer_id] = replace(trainer, visits=tuple(v for v in trainer.visits if v != visit_id))
        return self.by_id.pop(visit_id, None) is not None

    def list_for_trainer_with_school(self, *, trainer_id, status=None):
        rows = []
        for v in sorted(self.by_id.values(), key=lambda v: (v.visit_date, v.time)):
            if v.trainer_id != trainer_id or (status is not None and v.status != status):
                continue
            school = self._schools.get_by_school_id(v.school_id)
            if school:
                rows.append((v, school))
        return rows

    def list_for_school(self, school_id):
        return [v for v in self.by_id.values() if v.school_id == school_id]

    def school_ids_for_trainer(self, trainer_id):
        return sorted({v.school_id for v in self.by_id.values() if v.trainer_id == trainer_id})

    def status_counts_for_trainer(self, trainer_id):
        counts: dict[str, int] = {}
        for v in self.by_id.values():
            if v.trainer_id == trainer_id:
                counts[v.status.value] = counts.get(v.status.value, 0) + 1
        return counts

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        items = [v for v in self.by_id.values() if all(getattr(v, k) == v_ for k, v_ in filters.items())]
        return _page(items, options)


class InMemoryStatistics:
    def __init__(self):
        self.items: list[Statistic] = []

    def create(self, data: dict) -> Statistic:
        stat = Statistic(statistic_id=len(self.items) + 1, data=data, created_at=datetime(2024, 1, 1))
        self.items.append(stat)
        return stat

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        items = [s for s in self.items if all(str(s.data.get(k)) == v for k, v in filters.items())]
        return _page(items, options)


class InMemoryVisitRequests:
    def __init__(self):
        self.items: list[VisitRequest] = []

    def create(self, request: NewVisitRequest) -> VisitRequest:
        created = VisitRequest(request_id=len(self.items) + 1, created_at=datetime(2024, 1, 1), **vars(request))
        self.items.append(created)
        return created

    def query(self, *, filters: dict, options: PageOptions) -> QueryResult:
        items = [r for r in self.items if all(getattr(r, k) == v for k, v in filters.items())]
        return _page(items, options)


class RecordingNotifier:
    def __init__(self):
        self.sent: list[tuple[str, str, str]] = []

    def send_message(self, device_token: str, title: str, body: str) -> None:
        self.sent.append((device_token, title, body))


@pytest.fixture
def users():
    return InMemoryUsers()


@pytest.fixture
def schools(users):
    return InMemorySchools(users)


@pytest.fixture
def students():
    return InMemoryStudents()


@pytest.fixture
def visits(users, schools):
    return InMemoryVisits(users, schools)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def container(users, schools, students, visits, notifier):
    return wire(
        conn=None,
        users_repo=users,
        schools_repo=schools,
        students_repo=students,
        visits_repo=visits,
        statistics_repo=InMemoryStatistics(),
        visit_requests_repo=InMemoryVisitRequests(),
        notifier=notifier,
    )


@pytest.fixture
def client(container, tmp_path):
    app = create_app(container, settings_module="config.testing")
    app.config["UPLOAD_FOLDER"] = str(tmp_path)
    return app.test_client()


@pytest.fixture
def visit_day():
    return date(2024, 1, 10)
