"""Absence ledger: one row per subject missed on a given school day."""
from collections import Counter

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from attendance_app.extensions import db
from attendance_app.errors import ValidationError, ConflictError
from attendance_app.models import Absence, TimetableSlot
from utils.dates import parse_civil_date, weekday_name, day_bounds

HOURS_PER_PERIOD = 1
MAX_REASON_LENGTH = 255


def _parse_date(value):
    if not value:
        raise ValidationError("Absence date is required (date)")
    try:
        return parse_civil_date(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid date format, use YYYY-MM-DD")


def _clean_reason(value):
    if value is None:
        return ""
    reason = str(value).strip()
    if len(reason) > MAX_REASON_LENGTH:
        raise ValidationError(f"Reason must be at most {MAX_REASON_LENGTH} characters")
    return reason


def _day_filter(user_id, day):
    start, end = day_bounds(day)
    return Absence.query.filter(
        Absence.user_id == user_id,
        Absence.date >= start,
        Absence.date < end,
    )


def record_absence(user_id, date_value, reason=None):
    """
    Record a full day of absence against the student's timetable.

    Every subject scheduled on that weekday gets one row, with one hour per
    period. Returns the weekday name and the number of subjects affected.
    """
    day = _parse_date(date_value)
    reason = _clean_reason(reason)

    weekday = weekday_name(day)
    if not weekday:
        raise ValidationError("The selected date is not a school day (Monday-Friday)")

    if _day_filter(user_id, day).first():
        raise ConflictError("An absence has already been recorded for this date")

    slots = TimetableSlot.query.filter_by(user_id=user_id, day=weekday).all()
    if not slots:
        raise ValidationError("No timetable is configured for this day")

    periods = Counter(slot.subject_code for slot in slots)
    rows = [
        Absence(
            user_id=user_id,
            date=day,
            subject_code=code,
            hours=count * HOURS_PER_PERIOD,
            reason=reason,
        )
        for code, count in periods.items()
    ]
    db.session.add_all(rows)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("An absence has already been recorded for this date")

    return {"weekday": weekday, "subjectsAffected": len(rows)}


def delete_absences_for_date(user_id, date_value):
    day = _parse_date(date_value)
    deleted = _day_filter(user_id, day).delete()
    db.session.commit()
    return deleted


def delete_all_absences(user_id):
    deleted = Absence.query.filter_by(user_id=user_id).delete()
    db.session.commit()
    return deleted


def list_absence_dates(user_id):
    """Absent days with the hours missed on each, newest first."""
    rows = (
        db.session.query(Absence.date, func.sum(Absence.hours).label("total_hours"))
        .filter(Absence.user_id == user_id)
        .group_by(Absence.date)
        .order_by(Absence.date.desc())
        .all()
    )
    return [
        {"date": row.date.isoformat(), "totalHours": int(row.total_hours or 0)}
        for row in rows
    ]
