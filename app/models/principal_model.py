# /reporting-backend/app/models/principal_model.py

from pydantic import BaseModel


class Principal(BaseModel):
    """
    The authenticated caller, as decoded from the bearer token.
    `role` is one of 'student', 'lecturer', 'pl' or 'prl'.
    """
    id: int
    role: str
