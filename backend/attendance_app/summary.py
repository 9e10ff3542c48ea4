from collections import defaultdict

from attendance_app.models import Absence, SubjectEnrollment

# Above this share of missed hours a subject is marked มส. (fail).
FAIL_THRESHOLD = 20
# Display-only warning tier; does not affect pass/miss counts.
AT_RISK_THRESHOLD = 10


def _number(value):
    value = value or 0
    return int(value) if float(value).is_integer() else value


def classify(percent_absent):
    if percent_absent > FAIL_THRESHOLD:
        return "fail"
    if percent_absent > AT_RISK_THRESHOLD:
        return "at_risk"
    return "pass"


def compute_summary(user_id):
    """Per-subject and overall absence percentages, derived from the ledger each call."""
    enrollments = SubjectEnrollment.query.filter_by(user_id=user_id).order_by(SubjectEnrollment.id).all()

    absent_by_code = defaultdict(int)
    for absence in Absence.query.filter_by(user_id=user_id).all():
        absent_by_code[absence.subject_code] += absence.hours

    subjects = []
    for enrollment in enrollments:
        absent_hours = absent_by_code.get(enrollment.code, 0)
        total = enrollment.total_hours or 0
        percent_absent = (absent_hours / total) * 100 if total > 0 else 0.0
        subjects.append({
            "code": enrollment.code,
            "name": enrollment.name,
            "credits": _number(enrollment.credits),
            "totalHours": _number(total),
            "absentHours": absent_hours,
            "percentAbsent": percent_absent,
            "status": classify(percent_absent),
        })

    subject_count = len(subjects)
    miss_count = sum(1 for s in subjects if s["percentAbsent"] > FAIL_THRESHOLD)
    total_percent = sum(s["percentAbsent"] for s in subjects) / subject_count if subject_count else 0.0

    return {
        "subjectCount": subject_count,
        "passCount": subject_count - miss_count,
        "missCount": miss_count,
        "totalPercentAbsent": total_percent,
        "subjects": subjects,
    }
