"""
User Entity

Represents an identity supplied by the external identity provider.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - an authenticated identity that can belong to many tenants.

    Business Rules:
    - Email must be unique across all users (stored normalized)
    - Authentication happens upstream; this service only receives identities
    - roles holds global role names owned by the external permission system
      (used for super-admin bypass and panel admission only)
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)

    roles: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
