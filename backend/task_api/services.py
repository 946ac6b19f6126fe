"""Business logic services used by HTTP controllers.

Services are intentionally thin: each method performs one repository
call and returns its result unchanged. There are no business rules
beyond mapping request payloads onto the `Task` model.
"""

from typing import List, Optional

from sqlmodel import Session

from . import models, repositories
from .schemas import TaskIn


class TaskService:
    """Create, read, update and delete tasks."""
    def __init__(self, session: Session):
        self.session = session
        self.task_repo = repositories.TaskRepository(session)

    def find_all(self) -> List[models.Task]:
        return self.task_repo.find()

    def find_one(self, task_id: str) -> Optional[models.Task]:
        return self.task_repo.find_one(task_id)

    def create(self, payload: TaskIn) -> models.Task:
        """Persist a new task; the id is generated by the model."""
        task = models.Task(**payload.model_dump())
        return self.task_repo.save(task)

    def update(self, task_id: str, payload: TaskIn) -> Optional[models.Task]:
        """Write the fields the client sent, then re-read the row.

        Returns `None` when no task has `task_id`.
        """
        self.task_repo.update(task_id, payload.model_dump(exclude_unset=True))
        return self.task_repo.find_one(task_id)

    def remove(self, task_id: str) -> None:
        self.task_repo.delete(task_id)
