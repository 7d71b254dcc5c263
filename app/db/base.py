# /app/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that the Base class knows about them
# when Alembic runs its auto-generation scan and when tables are created.

from .base_class import Base

from .models.user_models import User
from .models.school_models import School, SchoolClass, Subject, Schedule
from .models.people_models import Teacher, Student, Parent, parent_students
from .models.record_models import Grade, Attendance, Payment
from .models.audit_models import AuditLog
