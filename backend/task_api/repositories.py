"""Repository classes encapsulating database operations.

Repositories return SQLModel objects and perform commits/refreshes
where appropriate. Bulk `update`/`delete` statements report the number
of affected rows; matching nothing is not an error.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, update
from sqlmodel import Session, select

from . import models


class TaskRepository:
    """CRUD operations for `Task` objects."""
    def __init__(self, session: Session):
        self.session = session

    def find(self) -> List[models.Task]:
        """Return every task row."""
        return list(self.session.exec(select(models.Task)).all())

    def find_one(self, task_id: str) -> Optional[models.Task]:
        """Return a `Task` by primary key or `None` if not found."""
        return self.session.get(models.Task, task_id)

    def save(self, task: models.Task) -> models.Task:
        """Persist a task and return the managed instance."""
        self.session.add(task)
        self.session.commit()
        self.session.refresh(task)
        return task

    def update(self, task_id: str, values: Dict[str, Any]) -> int:
        """Write `values` onto the row with `task_id`."""
        if not values:
            return 0
        stmt = update(models.Task).where(models.Task.id == task_id).values(**values)
        result = self.session.exec(stmt)
        self.session.commit()
        # the identity map may hold a stale copy of the row
        self.session.expire_all()
        return result.rowcount

    def delete(self, task_id: str) -> int:
        """Remove the row with `task_id`."""
        stmt = delete(models.Task).where(models.Task.id == task_id)
        result = self.session.exec(stmt)
        self.session.commit()
        self.session.expire_all()
        return result.rowcount
