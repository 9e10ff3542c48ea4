from flask import Blueprint, request, jsonify, g
from flask_jwt_extended import jwt_required
from attendance_app.extensions import db
from attendance_app.errors import AttendanceError
from attendance_app.absences import (
    record_absence, delete_absences_for_date, delete_all_absences, list_absence_dates
)
from utils.serialization import request_json
from utils.audit import log_event
from utils.decorators import current_user_required

absences_bp = Blueprint('absences', __name__)


@absences_bp.route('/dates', methods=['GET'])
@jwt_required()
@current_user_required
def absence_dates():
    return jsonify(list_absence_dates(g.current_user.id)), 200


@absences_bp.route('', methods=['POST'])
@jwt_required()
@current_user_required
def create_absence():
    data = request_json()
    user = g.current_user

    try:
        result = record_absence(user.id, data.get('date'), data.get('reason'))
    except AttendanceError as e:
        db.session.rollback()
        return jsonify({"error": e.message}), e.status_code

    log_event("ABSENCE_RECORDED", user_id=user.id, ip=request.remote_addr,
              description=f"{data.get('date')} ({result['weekday']}, {result['subjectsAffected']} subjects)")
    return jsonify({"message": "Absence recorded", **result}), 201


@absences_bp.route('/<date_str>', methods=['DELETE'])
@jwt_required()
@current_user_required
def delete_absence_day(date_str):
    user = g.current_user
    try:
        deleted = delete_absences_for_date(user.id, date_str)
    except AttendanceError as e:
        return jsonify({"error": e.message}), e.status_code

    log_event("ABSENCE_DELETED", user_id=user.id, ip=request.remote_addr,
              description=f"{date_str}: {deleted} rows")
    return jsonify({"message": "Absences for the date deleted", "deletedCount": deleted}), 200


@absences_bp.route('', methods=['DELETE'])
@jwt_required()
@current_user_required
def delete_absences():
    user = g.current_user
    deleted = delete_all_absences(user.id)

    log_event("ABSENCES_CLEARED", user_id=user.id, ip=request.remote_addr, description=f"{deleted} rows")
    return jsonify({"message": "All absences deleted", "deletedCount": deleted}), 200
