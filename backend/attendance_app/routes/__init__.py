from .auth import auth_bp
from .profile import profile_bp
from .subjects import subjects_bp
from .classes import classes_bp, public_classes_bp
from .absences import absences_bp
from .summary import summary_bp
from .base_route import base_bp


def register_routes(app):
    app.register_blueprint(base_bp)
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(profile_bp, url_prefix='/api/me')
    app.register_blueprint(subjects_bp, url_prefix='/api/subjects')
    app.register_blueprint(classes_bp, url_prefix='/api/classes')
    app.register_blueprint(public_classes_bp, url_prefix='/api/public/classes')
    app.register_blueprint(absences_bp, url_prefix='/api/absences')
    app.register_blueprint(summary_bp, url_prefix='/api/summary')
