# /reporting-backend/app/services/errors.py

"""
Business-level exceptions raised by the service layer.

Routers translate these into HTTP responses; they never leak past the API
boundary. Store failures are not wrapped here: a raw `SQLAlchemyError`
propagates and is turned into a generic 500 by the app-level handler.
"""


class ReportValidationError(ValueError):
    """A required field was missing. Raised before any store access."""


class ReportNotFoundError(LookupError):
    """The report does not exist or is outside the caller's ownership scope."""


class ScopeResolutionError(RuntimeError):
    """A hierarchy lookup failed; no partial scope is ever returned."""


class HierarchyValidationError(ValueError):
    """A class or course update is missing a required field."""


class HierarchyNotFoundError(LookupError):
    """A class, course, program or lecturer named by an update does not exist, or the PL does not own it."""
