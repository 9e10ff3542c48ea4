from .User import User, TokenBlocklist
from .Timetable import TimetableSlot, ClassTimetableSlot
from .Enrollment import SubjectEnrollment
from .Absence import Absence
from .base import RoleEnum, TimestampMixin
