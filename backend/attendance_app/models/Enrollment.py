from attendance_app.extensions import db


class SubjectEnrollment(db.Model):
    __tablename__ = 'subject_enrollments'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    code = db.Column(db.String(40), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    total_hours = db.Column(db.Float, nullable=False, default=0)  # hours in the curriculum
    credits = db.Column(db.Float, nullable=False, default=0)

    user = db.relationship('User', back_populates='enrollments')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'code', name='uq_enrollment_user_code'),
    )
