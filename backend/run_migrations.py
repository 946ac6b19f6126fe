"""Simple migration runner applying the SQL files in migrations/.

Used instead of table synchronization when `DB_SYNCHRONIZE=false`.
"""
from pathlib import Path
import logging

BASE = Path(__file__).parent
MIGRATIONS_DIR = BASE / "migrations"

log = logging.getLogger("task_api.migrations")


def _statements(sql: str):
    lines = [ln for ln in sql.splitlines() if not ln.strip().startswith("--")]
    for stmt in "\n".join(lines).split(";"):
        if stmt.strip():
            yield stmt.strip()


def run(engine=None, migrations_dir: Path = MIGRATIONS_DIR):
    """Execute SQL migration files against the configured database.

    The function applies every `migrations/*.sql` file in lexical order
    inside one transaction and returns the names of the applied files.
    """
    if engine is None:
        from task_api.database import engine
    applied = []
    with engine.begin() as conn:
        for m in sorted(migrations_dir.glob("*.sql")):
            log.info("Applying: %s", m.name)
            for stmt in _statements(m.read_text(encoding="utf-8")):
                conn.exec_driver_sql(stmt)
            applied.append(m.name)
    return applied


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    names = run()
    print("Migrations applied:", ", ".join(names) or "none")
