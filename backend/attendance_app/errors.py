class AttendanceError(ValueError):
    """Base for errors that are reported back to the client as-is."""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AttendanceError):
    status_code = 400


class ConflictError(AttendanceError):
    status_code = 409
