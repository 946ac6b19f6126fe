"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class TaskIn(BaseModel):
    """Payload for creating or updating a task.

    Unknown fields are rejected rather than silently dropped.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: str


class TaskOut(BaseModel):
    """Task representation returned by every task endpoint."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: Optional[str] = None
    description: str
