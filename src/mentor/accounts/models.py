"""Data models for user accounts."""

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class Account(BaseModel):
    """A registered user. ``password_hash`` is a salted bcrypt hash."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    email: str
    password_hash: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
