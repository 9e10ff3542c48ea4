from attendance_app.extensions import db
from .base import TimestampMixin


class TimetableSlot(db.Model, TimestampMixin):
    """A student's own timetable: one subject per (day, period)."""
    __tablename__ = 'timetable_slots'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    day = db.Column(db.String(20), nullable=False)
    period = db.Column(db.Integer, nullable=False)
    subject_code = db.Column(db.String(40), nullable=False)

    user = db.relationship('User', back_populates='timetable_slots')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'day', 'period', name='uq_timetable_user_day_period'),
    )


class ClassTimetableSlot(db.Model, TimestampMixin):
    """Room-level default timetable maintained by teachers."""
    __tablename__ = 'class_timetable_slots'

    id = db.Column(db.Integer, primary_key=True)
    level = db.Column(db.String(20), nullable=False)
    room = db.Column(db.String(20), nullable=False)
    day = db.Column(db.String(20), nullable=False)
    period = db.Column(db.Integer, nullable=False)
    subject_code = db.Column(db.String(40), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('level', 'room', 'day', 'period', name='uq_class_timetable_slot'),
        db.Index('ix_class_timetable_level_room', 'level', 'room'),
    )
