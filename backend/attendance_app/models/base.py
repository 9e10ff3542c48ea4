from datetime import datetime
from attendance_app.extensions import db
import enum


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class RoleEnum(enum.Enum):
    student = "student"
    teacher = "teacher"
