from pathlib import Path
import os
import pytest

TEST_DB = Path(__file__).resolve().parents[1] / "test.db"

# Must happen before task_api is imported anywhere: importing the app
# creates the tables and opens pooled connections to this file.
if TEST_DB.exists():
    TEST_DB.unlink()
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
os.environ.setdefault("DB_SYNCHRONIZE", "true")
os.environ["API_PREFIX"] = ""


@pytest.fixture(scope="session", autouse=True)
def reset_db():
    """Create the tables once and remove the SQLite file afterwards."""
    from task_api.database import create_db_and_tables, engine
    create_db_and_tables()
    yield
    # pooled connections must be closed before the file goes away
    engine.dispose()
    if TEST_DB.exists():
        try:
            TEST_DB.unlink()
        except OSError:
            pass


@pytest.fixture(autouse=True)
def empty_tasks(reset_db):
    """Start every test with an empty task table."""
    from sqlalchemy import delete
    from sqlmodel import Session
    from task_api.database import engine
    from task_api.models import Task
    with Session(engine) as session:
        session.exec(delete(Task))
        session.commit()
    yield
