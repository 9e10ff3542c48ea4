from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime
from attendance_app.extensions import db
from .base import RoleEnum, TimestampMixin
from utils.serialization import to_dict


class User(db.Model, TimestampMixin):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(512), nullable=False)
    full_name = db.Column(db.String(120), nullable=False)
    level = db.Column(db.String(20), nullable=False)  # e.g. "ม.6"
    room = db.Column(db.String(20), nullable=False)   # e.g. "6/2"
    role = db.Column(db.Enum(RoleEnum), nullable=False, default=RoleEnum.student, index=True)

    timetable_slots = db.relationship('TimetableSlot', back_populates='user', lazy=True, cascade="all, delete-orphan")
    enrollments = db.relationship('SubjectEnrollment', back_populates='user', lazy=True, cascade="all, delete-orphan")
    absences = db.relationship('Absence', back_populates='user', lazy=True, cascade="all, delete-orphan")

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return to_dict(self, fields=("id", "username", "full_name", "level", "room", "role"), camel=True)


class TokenBlocklist(db.Model):
    __tablename__ = 'token_blocklist'

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(36), nullable=False, index=True)
    token_type = db.Column(db.String(10), nullable=False, default="access")
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    expires_at = db.Column(db.DateTime, nullable=False)

    user = db.relationship("User", backref="revoked_tokens")
