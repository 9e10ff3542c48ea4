import logging
import os
from datetime import datetime
from flask import current_app, has_app_context


def log_event(event_type, user_id=None, ip=None, description=None, level="INFO", log_file=None):
    """
    Logs a security or audit-related event.

    Parameters:
        event_type (str): The type of the event (e.g., LOGIN_SUCCESS).
        user_id (int|None): The user ID, if available.
        ip (str|None): IP address, if available.
        description (str|None): Additional context.
        level (str): Log level (e.g., INFO, WARNING, ERROR).
        log_file (str|None): Overrides the AUDIT_LOG_FILE setting.

    The entry always goes to the app logger; it is also appended to the
    audit file when one is configured.
    """
    timestamp = datetime.utcnow().strftime('%Y-%m-%d %H:%M:%S')
    log_entry = (
        f"[{timestamp}] [{level.upper()}] EVENT: {event_type} | "
        f"USER: {user_id or 'N/A'} | IP: {ip or 'N/A'} | DESC: {description or 'N/A'}"
    )

    if not has_app_context():
        return log_entry

    current_app.logger.log(_level_number(level), log_entry)

    path = log_file or current_app.config.get("AUDIT_LOG_FILE")
    if path:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "a", encoding="utf-8") as audit_file:
            audit_file.write(log_entry + "\n")

    return log_entry


def _level_number(level):
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else logging.INFO
