from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from attendance_app.extensions import db
from attendance_app.curriculum import get_curriculum

base_bp = Blueprint("base", __name__)


@base_bp.route("/")
def home():
    return jsonify({"message": "Attendance backend is running"})


@base_bp.route("/api/health")
def health():
    try:
        db.session.execute(text("SELECT 1"))
    except Exception:
        current_app.logger.exception("Database health check failed")
        return jsonify({"status": "error", "database": "unreachable"}), 500

    return jsonify({"status": "ok", "database": "ok", "curriculumRows": get_curriculum().row_count()})
