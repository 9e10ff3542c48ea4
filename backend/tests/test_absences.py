from datetime import date

import pytest

from attendance_app import absences
from attendance_app.absences import record_absence, MAX_REASON_LENGTH
from attendance_app.extensions import db
from attendance_app.errors import ConflictError, ValidationError
from attendance_app.models import Absence, User
from conftest import auth_header, MONDAY, TUESDAY, SATURDAY

MONDAY_TIMETABLE = [
    {"day": "จันทร์", "period": 1, "subjectCode": "MATH101"},
    {"day": "จันทร์", "period": 2, "subjectCode": "MATH101"},
    {"day": "จันทร์", "period": 3, "subjectCode": "ENG101"},
]


@pytest.fixture
def student_token(register):
    return register(timetable=MONDAY_TIMETABLE)


def test_absence_counts_periods_per_subject(app, client, student_token):
    response = client.post("/api/absences", headers=auth_header(student_token),
                           json={"date": MONDAY, "reason": "sick"})
    assert response.status_code == 201
    body = response.get_json()
    assert body["weekday"] == "จันทร์"
    assert body["subjectsAffected"] == 2

    with app.app_context():
        rows = {a.subject_code: a for a in Absence.query.all()}
    assert {code: row.hours for code, row in rows.items()} == {"MATH101": 2, "ENG101": 1}
    assert all(row.reason == "sick" for row in rows.values())
    assert all(row.date.isoformat() == MONDAY for row in rows.values())


def test_second_absence_same_day_conflicts(app, client, student_token):
    first = client.post("/api/absences", headers=auth_header(student_token), json={"date": MONDAY})
    assert first.status_code == 201

    second = client.post("/api/absences", headers=auth_header(student_token), json={"date": MONDAY})
    assert second.status_code == 409
    assert "error" in second.get_json()

    with app.app_context():
        assert Absence.query.count() == 2


def test_weekend_is_rejected(app, client, student_token):
    response = client.post("/api/absences", headers=auth_header(student_token), json={"date": SATURDAY})
    assert response.status_code == 400
    with app.app_context():
        assert Absence.query.count() == 0


def test_day_without_timetable_is_rejected(client, student_token):
    response = client.post("/api/absences", headers=auth_header(student_token), json={"date": TUESDAY})
    assert response.status_code == 400
    assert "timetable" in response.get_json()["error"]


@pytest.mark.parametrize("value", [None, "", "18/11/2025", "2025-02-30"])
def test_bad_dates_are_rejected(client, student_token, value):
    response = client.post("/api/absences", headers=auth_header(student_token), json={"date": value})
    assert response.status_code == 400


def test_absence_requires_token(client):
    assert client.post("/api/absences", json={"date": MONDAY}).status_code == 401


def test_iso_datetime_uses_school_date(app, client, student_token):
    # 2025-11-16 20:00 UTC is already Monday morning in Bangkok
    response = client.post("/api/absences", headers=auth_header(student_token),
                           json={"date": "2025-11-16T20:00:00+00:00"})
    assert response.status_code == 201
    assert response.get_json()["weekday"] == "จันทร์"


def test_record_absence_errors_directly(app, student_token):
    with app.app_context():
        user = User.query.filter_by(username="somchai").first()
        record_absence(user.id, MONDAY)
        with pytest.raises(ConflictError):
            record_absence(user.id, MONDAY)
        with pytest.raises(ValidationError):
            record_absence(user.id, SATURDAY)


def test_list_dates_groups_and_sorts(client, student_token):
    client.post("/api/absences", headers=auth_header(student_token), json={"date": MONDAY})
    client.post("/api/absences", headers=auth_header(student_token), json={"date": "2025-11-24"})
    client.post("/api/absences", headers=auth_header(student_token), json={"date": "2025-11-10"})

    response = client.get("/api/absences/dates", headers=auth_header(student_token))
    assert response.status_code == 200
    assert response.get_json() == [
        {"date": "2025-11-24", "totalHours": 3},
        {"date": MONDAY, "totalHours": 3},
        {"date": "2025-11-10", "totalHours": 3},
    ]


def test_delete_one_day(client, student_token):
    client.post("/api/absences", headers=auth_header(student_token), json={"date": MONDAY})
    client.post("/api/absences", headers=auth_header(student_token), json={"date": "2025-11-24"})

    response = client.delete(f"/api/absences/{MONDAY}", headers=auth_header(student_token))
    assert response.status_code == 200
    assert response.get_json()["deletedCount"] == 2

    dates = client.get("/api/absences/dates", headers=auth_header(student_token)).get_json()
    assert [d["date"] for d in dates] == ["2025-11-24"]

    # the day can be recorded again once cleared
    again = client.post("/api/absences", headers=auth_header(student_token), json={"date": MONDAY})
    assert again.status_code == 201


def test_delete_bad_date(client, student_token):
    response = client.delete("/api/absences/not-a-date", headers=auth_header(student_token))
    assert response.status_code == 400


def test_delete_all_absences(client, student_token):
    client.post("/api/absences", headers=auth_header(student_token), json={"date": MONDAY})
    client.post("/api/absences", headers=auth_header(student_token), json={"date": "2025-11-24"})

    response = client.delete("/api/absences", headers=auth_header(student_token))
    assert response.status_code == 200
    assert response.get_json()["deletedCount"] == 4

    assert client.get("/api/absences/dates", headers=auth_header(student_token)).get_json() == []


def test_absences_are_per_student(client, register, student_token):
    other = register(username="malee", timetable=MONDAY_TIMETABLE)
    client.post("/api/absences", headers=auth_header(student_token), json={"date": MONDAY})

    assert client.get("/api/absences/dates", headers=auth_header(other)).get_json() == []
    response = client.post("/api/absences", headers=auth_header(other), json={"date": MONDAY})
    assert response.status_code == 201


def test_absence_is_audited(app, client, student_token, tmp_path):
    client.post("/api/absences", headers=auth_header(student_token), json={"date": MONDAY})
    audit = (tmp_path / "logs" / "audit.log").read_text(encoding="utf-8")
    assert "EVENT: ABSENCE_RECORDED" in audit
    assert "EVENT: REGISTER" in audit


def test_list_body_is_rejected(client, student_token):
    response = client.post("/api/absences", headers=auth_header(student_token), json=[MONDAY])
    assert response.status_code == 400


def test_overlong_reason_is_rejected(app, client, student_token):
    response = client.post("/api/absences", headers=auth_header(student_token),
                           json={"date": MONDAY, "reason": "x" * (MAX_REASON_LENGTH + 1)})
    assert response.status_code == 400
    assert "Reason" in response.get_json()["error"]
    with app.app_context():
        assert Absence.query.count() == 0


def test_non_string_reason_is_stored_as_text(app, client, student_token):
    response = client.post("/api/absences", headers=auth_header(student_token),
                           json={"date": MONDAY, "reason": 42})
    assert response.status_code == 201
    with app.app_context():
        assert {a.reason for a in Absence.query.all()} == {"42"}


def test_unique_constraint_race_becomes_conflict(app, student_token, monkeypatch):
    with app.app_context():
        user = User.query.filter_by(username="somchai").first()
        db.session.add(Absence(user_id=user.id, date=date(2025, 11, 17), subject_code="MATH101", hours=2))
        db.session.commit()

        # another request wrote the day between the duplicate check and the insert
        monkeypatch.setattr(absences, "_day_filter", lambda user_id, day: Absence.query.filter(db.false()))
        with pytest.raises(ConflictError):
            record_absence(user.id, MONDAY)

        assert [(a.subject_code, a.hours) for a in Absence.query.all()] == [("MATH101", 2)]
