"""SQLModel data models.

This module defines the application's database tables using SQLModel.
The table schema is derived from these declarations.
"""

import uuid
from typing import Optional

from sqlmodel import SQLModel, Field


def _new_id() -> str:
    return str(uuid.uuid4())


class Task(SQLModel, table=True):
    """A single to-do item.

    Fields:
    - `id`: UUID4 text assigned on insert, never changed afterwards
    - `title`: optional short label
    - `description`: required body text
    """
    __tablename__ = "task"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=36)
    title: Optional[str] = Field(default=None, nullable=True)
    description: str = Field(nullable=False)
