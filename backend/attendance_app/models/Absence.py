from attendance_app.extensions import db
from .base import TimestampMixin


class Absence(db.Model, TimestampMixin):
    __tablename__ = 'absences'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)  # school civil date (UTC+7)
    subject_code = db.Column(db.String(40), nullable=False)
    hours = db.Column(db.Integer, nullable=False)
    reason = db.Column(db.String(255), nullable=False, default="")

    user = db.relationship('User', back_populates='absences')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'date', 'subject_code', name='uq_absence_user_date_subject'),
    )
