from __future__ import annotations

from datetime import date

import pytest

from lifeskill_admin.core.enums import Role, VisitStatus
from lifeskill_admin.core.exceptions import ConflictError, NotFoundError, NotificationError
from lifeskill_admin.students.model import NewStudent
from lifeskill_admin.visits.service import VisitService


class FailingNotifier:
    def __init__(self):
        self.calls = 0

    def send_message(self, device_token: str, title: str, body: str) -> None:
        self.calls += 1
        raise NotificationError("push gateway down")


def _service(users, schools, students, visits, notifier) -> VisitService:
    return VisitService(visits, users, schools, students, notifier)


ATTENDANCE = {
    "in_time": "09:00",
    "out_time": "11:00",
    "in_date": date(2024, 1, 10),
    "out_date": date(2024, 1, 10),
    "file": "in.jpg",
    "file1": "out.jpg",
}


def test_schedule_visit_links_visit_to_trainer_and_notifies(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1", device_token="device-abc")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)

    visit = service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")

    assert visit.status == VisitStatus.SCHEDULED
    assert users.get_by_id(trainer.user_id).visits == (visit.visit_id,)
    assert len(notifier.sent) == 1
    token, title, body = notifier.sent[0]
    assert token == "device-abc"
    assert title == "Visits"
    assert "S1" in body


def test_schedule_same_slot_twice_conflicts(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")

    with pytest.raises(ConflictError, match="Visit scheduled already found"):
        service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")

    assert len(visits.by_id) == 1
    assert len(users.get_by_id(trainer.user_id).visits) == 1


def test_schedule_other_time_same_day_is_allowed(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)

    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="14:00")

    assert len(users.get_by_id(trainer.user_id).visits) == 2


def test_schedule_unknown_trainer_creates_nothing(users, schools, students, visits, notifier, visit_day):
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)

    with pytest.raises(NotFoundError, match="Trainer not found"):
        service.schedule_visit(trainer_id=99, school_id="S1", visit_date=visit_day, time="10:00")
    assert visits.by_id == {}


def test_schedule_unknown_school_is_not_found(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    service = _service(users, schools, students, visits, notifier)

    with pytest.raises(NotFoundError, match="School not found"):
        service.schedule_visit(trainer_id=trainer.user_id, school_id="NOPE", visit_date=visit_day, time="10:00")


def test_schedule_without_device_token_skips_push(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)

    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")

    assert notifier.sent == []


def test_failed_push_keeps_the_visit(users, schools, students, visits, visit_day, caplog):
    trainer = users.add("t1", device_token="device-abc")
    schools.add("S1")
    failing = FailingNotifier()
    service = _service(users, schools, students, visits, failing)

    visit = service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")

    assert failing.calls == 1
    assert visits.get_by_id(visit.visit_id) is not None
    assert "notification" in caplog.text


def test_update_with_all_attendance_fields_completes_visit(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")

    updated = service.update_visit(school_id="S1", trainer_id=trainer.user_id, update_body=dict(ATTENDANCE))

    assert updated.status == VisitStatus.COMPLETED
    assert updated.in_time == "09:00"
    assert updated.file1 == "out.jpg"


def test_partial_attendance_keeps_visit_scheduled(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")

    body = {k: v for k, v in ATTENDANCE.items() if k != "file1"}
    updated = service.update_visit(school_id="S1", trainer_id=trainer.user_id, update_body=body)

    assert updated.status == VisitStatus.SCHEDULED
    assert updated.out_time == "11:00"


def test_update_targets_earliest_open_visit(users, schools, students, visits, notifier):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)
    later = service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=date(2024, 2, 1), time="10:00")
    earlier = service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=date(2024, 1, 5), time="10:00")

    first = service.update_visit(school_id="S1", trainer_id=trainer.user_id, update_body=dict(ATTENDANCE))
    second = service.update_visit(school_id="S1", trainer_id=trainer.user_id, update_body={"standard": "7"})

    assert first.visit_id == earlier.visit_id
    assert second.visit_id == later.visit_id


def test_update_into_taken_slot_conflicts(users, schools, students, visits, notifier):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=date(2024, 1, 5), time="10:00")
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=date(2024, 1, 6), time="10:00")

    with pytest.raises(ConflictError):
        service.update_visit(
            school_id="S1",
            trainer_id=trainer.user_id,
            update_body={"visit_date": date(2024, 1, 6)},
        )


def test_update_without_visit_is_not_found(users, schools, students, visits, notifier):
    trainer = users.add("t1")
    service = _service(users, schools, students, visits, notifier)

    with pytest.raises(NotFoundError, match="Visit not found"):
        service.update_visit(school_id="S1", trainer_id=trainer.user_id, update_body={"standard": "5"})


def test_delete_visit_drops_trainer_reference(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)
    keep = service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="09:00")
    drop = service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")

    deleted = service.delete_visit(drop.visit_id)

    assert deleted.visit_id == drop.visit_id
    assert visits.get_by_id(drop.visit_id) is None
    assert users.get_by_id(trainer.user_id).visits == (keep.visit_id,)


def test_delete_unknown_visit_is_not_found(users, schools, students, visits, notifier):
    service = _service(users, schools, students, visits, notifier)

    with pytest.raises(NotFoundError, match="Visit not found"):
        service.delete_visit(42)


def test_trainer_visits_embed_school_and_filter_status(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    schools.add("S1", name="Alpha", block="B1")
    schools.add("S2", name="Beta")
    service = _service(users, schools, students, visits, notifier)
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="09:00")
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S2", visit_date=visit_day, time="12:00")
    service.update_visit(school_id="S2", trainer_id=trainer.user_id, update_body=dict(ATTENDANCE))

    everything = service.get_trainer_visits(trainer.user_id)
    completed = service.get_trainer_visits(trainer.user_id, VisitStatus.COMPLETED)

    assert [v["school"]["name"] for v in everything] == ["Alpha", "Beta"]
    assert everything[0]["school"]["block"] == "B1"
    assert [v["school"]["schoolId"] for v in completed] == ["S2"]
    assert completed[0]["status"] == "completed"


def test_visits_by_school_only_reports_trainer_counselors(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1", first_name="Asha", mob_number="999")
    admin = users.add("boss", role=Role.ADMIN)
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)
    service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="09:00")
    visits.create_for_trainer(trainer_id=admin.user_id, school_id="S1", visit_date=visit_day, time="11:00")

    rows = service.get_visits_by_school("S1")

    by_trainer = {row["visit"]["trainer"]: row for row in rows}
    assert by_trainer[trainer.user_id]["counselor"] == {
        "id": trainer.user_id,
        "firstName": "Asha",
        "lastName": None,
        "mobNumber": "999",
    }
    assert by_trainer[admin.user_id]["counselor"] is None


def test_visits_by_school_without_visits_is_not_found(users, schools, students, visits, notifier):
    service = _service(users, schools, students, visits, notifier)

    with pytest.raises(NotFoundError, match="Visits not found"):
        service.get_visits_by_school("S1")


def test_trainer_summary_counts_distinct_schools(users, schools, students, visits, notifier):
    trainer = users.add("t1")
    schools.add("A")
    schools.add("B")
    students.create(NewStudent(school_id="A", name="s1"))
    students.create(NewStudent(school_id="A", name="s2"))
    students.create(NewStudent(school_id="B", name="s3"))
    students.create(NewStudent(school_id="C", name="elsewhere"))
    service = _service(users, schools, students, visits, notifier)
    for school_id, day in (("A", 1), ("B", 2), ("A", 3)):
        service.schedule_visit(trainer_id=trainer.user_id, school_id=school_id, visit_date=date(2024, 1, day), time="10:00")
    service.update_visit(school_id="B", trainer_id=trainer.user_id, update_body=dict(ATTENDANCE))

    summary = service.get_trainer_summary(trainer.user_id)

    assert summary["totalSchools"] == 2
    assert summary["totalStudents"] == 3
    assert summary["statusCounts"] == {"scheduled": 2, "completed": 1}


def test_clearing_attendance_on_completed_visit_keeps_status(users, schools, students, visits, notifier, visit_day):
    trainer = users.add("t1")
    schools.add("S1")
    service = _service(users, schools, students, visits, notifier)
    visit = service.schedule_visit(trainer_id=trainer.user_id, school_id="S1", visit_date=visit_day, time="10:00")
    service.update_visit(school_id="S1", trainer_id=trainer.user_id, update_body=dict(ATTENDANCE))

    updated = service.update_visit(school_id="S1", trainer_id=trainer.user_id, update_body={"file1": None})

    assert updated.visit_id == visit.visit_id
    assert updated.file1 is None
    assert updated.status == VisitStatus.COMPLETED
