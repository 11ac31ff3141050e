# /reporting-backend/app/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# Importing them all here ensures `Base.metadata` knows every table before
# `create_all` runs at startup or in the test fixtures.

from .base_class import Base

from .models.user_models import User
from .models.hierarchy_models import Program, Course, Class, PrincipalLecturer
from .models.report_models import Report, StudentReport, Rating
