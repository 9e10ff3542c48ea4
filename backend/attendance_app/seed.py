from flask import current_app
from attendance_app.extensions import db
from attendance_app.models import User, RoleEnum


def ensure_admin_teacher(username=None, password=None):
    """
    Make sure a teacher account exists.

    An existing account with the same username is promoted to teacher and
    keeps its password. Returns (user, created).
    """
    config = current_app.config
    username = username or config["ADMIN_TEACHER_USERNAME"]
    password = password or config["ADMIN_TEACHER_PASSWORD"]

    existing = User.query.filter_by(username=username).first()
    if existing:
        if existing.role != RoleEnum.teacher:
            existing.role = RoleEnum.teacher
            db.session.commit()
        current_app.logger.info("Admin teacher %s already exists", username)
        return existing, False

    if not password:
        raise ValueError("ADMIN_TEACHER_PASSWORD is not set")

    user = User(
        username=username,
        full_name="Admin Teacher",
        level=config["ADMIN_TEACHER_LEVEL"],
        room=config["ADMIN_TEACHER_ROOM"],
        role=RoleEnum.teacher,
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    current_app.logger.info("Created admin teacher %s", username)
    return user, True
