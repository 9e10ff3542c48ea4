"""Timetable replacement and the enrollment list derived from it."""
from attendance_app.extensions import db
from attendance_app.models import TimetableSlot, ClassTimetableSlot, SubjectEnrollment
from utils.dates import WEEKDAYS, normalize_weekday
from utils.serialization import to_dict

MIN_PERIOD = 1
MAX_PERIOD = 10
MAX_CODE_LENGTH = 40


def filter_slots(raw_slots):
    """
    Keep only well-formed slots, as (day, period, subject_code) tuples.

    Bad entries are dropped rather than rejected. When the same (day, period)
    appears twice the later entry wins.
    """
    if not isinstance(raw_slots, list):
        return []

    kept = {}
    for slot in raw_slots:
        if not isinstance(slot, dict):
            continue
        day = normalize_weekday(slot.get("day"))
        period = slot.get("period")
        code = slot.get("subjectCode")

        if not day:
            continue
        if isinstance(period, bool) or not isinstance(period, int):
            continue
        if not MIN_PERIOD <= period <= MAX_PERIOD:
            continue
        if not isinstance(code, str) or not code.strip():
            continue
        if len(code.strip()) > MAX_CODE_LENGTH:
            continue

        kept[(day, period)] = code.strip()

    return [(day, period, code) for (day, period), code in kept.items()]


def _slot_order(slot):
    return WEEKDAYS.index(slot.day), slot.period


def _serialize(slots):
    return [
        to_dict(s, fields=("day", "period", "subject_code"), camel=True)
        for s in sorted(slots, key=_slot_order)
    ]


def materialize_enrollment(user, slots, curriculum):
    """Build enrollment rows for each distinct subject code in ``slots``."""
    meta_by_code = curriculum.metadata_by_code(user.level, user.room)
    enrollments = []
    seen = set()
    for _, _, code in slots:
        if code in seen:
            continue
        seen.add(code)
        meta = meta_by_code.get(code, {})
        enrollments.append(SubjectEnrollment(
            user_id=user.id,
            code=code,
            name=meta.get("name") or code,
            total_hours=meta.get("totalHours") or 0,
            credits=meta.get("credits") or 0,
        ))
    return enrollments


def replace_student_timetable(user, raw_slots, curriculum, commit=True):
    """
    Replace a student's timetable and recompute their enrolled subjects.

    Old slots and enrollments are deleted and the new ones inserted in the
    same transaction. Returns the number of slots stored.
    """
    slots = filter_slots(raw_slots)

    TimetableSlot.query.filter_by(user_id=user.id).delete()
    SubjectEnrollment.query.filter_by(user_id=user.id).delete()
    db.session.flush()

    db.session.add_all([
        TimetableSlot(user_id=user.id, day=day, period=period, subject_code=code)
        for day, period, code in slots
    ])
    db.session.add_all(materialize_enrollment(user, slots, curriculum))

    if commit:
        db.session.commit()
    return len(slots)


def refresh_enrollment(user, curriculum, commit=True):
    """Re-derive enrollments from the stored timetable, e.g. after a room change."""
    slots = [
        (s.day, s.period, s.subject_code)
        for s in sorted(TimetableSlot.query.filter_by(user_id=user.id).all(), key=_slot_order)
    ]
    SubjectEnrollment.query.filter_by(user_id=user.id).delete()
    db.session.flush()
    db.session.add_all(materialize_enrollment(user, slots, curriculum))

    if commit:
        db.session.commit()
    return len(slots)


def replace_class_timetable(level, room, raw_slots, commit=True):
    slots = filter_slots(raw_slots)

    ClassTimetableSlot.query.filter_by(level=level, room=room).delete()
    db.session.flush()

    db.session.add_all([
        ClassTimetableSlot(level=level, room=room, day=day, period=period, subject_code=code)
        for day, period, code in slots
    ])

    if commit:
        db.session.commit()
    return len(slots)


def get_student_timetable(user_id):
    return _serialize(TimetableSlot.query.filter_by(user_id=user_id).all())


def get_class_timetable(level, room):
    return _serialize(ClassTimetableSlot.query.filter_by(level=level, room=room).all())
