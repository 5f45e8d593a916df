from todo_api.database import Database
from todo_api.models import Task


def count_rows(database: Database) -> int:
    with database.get_session() as session:
        return session.query(Task).count()


def insert_tasks(database: Database, *titles: str) -> list:
    """Insert rows directly, bypassing the API, and return their ids in order."""
    ids = []
    with database.get_session() as session:
        for title in titles:
            row = Task(title=title)
            session.add(row)
            session.commit()
            ids.append(row.id)
    return ids


def get_row(database: Database, task_id: int) -> Task:
    with database.get_session() as session:
        return session.get(Task, task_id)
