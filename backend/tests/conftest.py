import pandas as pd
import pytest

from attendance_app import create_app
from attendance_app.config import TestConfig
from attendance_app.extensions import db
from attendance_app.seed import ensure_admin_teacher

CURRICULUM_ROWS = [
    # level, room, code, name, credits, hours
    ("ม.6", "6/2", "MATH101", "Mathematics", 1.5, 40),
    ("ม.6", "6/2", "ENG101", "English", 1, 20),
    ("ม.6", "6/2", "SCI101", "Science", 2, 80),
    ("ม.6", "6/1", "MATH101", "Mathematics (6/1)", 1.5, 60),
    ("ม.6", "6/1", "ART101", "Art", 0.5, 20),
    ("ม.5", "5/1", "THA201", "Thai", 1, 40),
    ("ม.5", "5/1", "HIS201", None, 1, 40),
]
CURRICULUM_HEADERS = ["ระดับชั้น", "ห้อง", "รหัสวิชา", "ชื่อรายวิชา", "หน่วยกิต", "ชั่วโมง"]

MONDAY = "2025-11-17"
TUESDAY = "2025-11-18"
SATURDAY = "2025-11-22"


@pytest.fixture
def curriculum_file(tmp_path):
    path = tmp_path / "curriculum.xlsx"
    pd.DataFrame(CURRICULUM_ROWS, columns=CURRICULUM_HEADERS).to_excel(path, index=False)
    return str(path)


@pytest.fixture
def app(curriculum_file, tmp_path):
    class _Config(TestConfig):
        CURRICULUM_XLSX_PATH = curriculum_file
        AUDIT_LOG_FILE = str(tmp_path / "logs" / "audit.log")

    app = create_app(_Config)
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    def _register(username="somchai", timetable=None, level="ม.6", room="6/2", password="secret123"):
        response = client.post("/api/auth/register", json={
            "username": username,
            "password": password,
            "fullName": "Somchai Jaidee",
            "level": level,
            "room": room,
            "timetable": timetable or [],
        })
        assert response.status_code == 201, response.get_json()
        return response.get_json()["token"]
    return _register


@pytest.fixture
def teacher_token(app, client):
    with app.app_context():
        ensure_admin_teacher("teacher1", "teach-pass")
    response = client.post("/api/auth/login", json={"username": "teacher1", "password": "teach-pass"})
    return response.get_json()["token"]
