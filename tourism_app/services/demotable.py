# tourism_app/services/demotable.py

from tourism_app.extensions import db
from tourism_app.services.pool import with_connection


def fetch_demotable():
    return with_connection(
        lambda connection: [
            list(row) for row in connection.execute(db.text("SELECT id, name FROM demotable ORDER BY id"))
        ]
    )


def insert_demotable(id, name) -> bool:
    def action(connection):
        result = connection.execute(
            db.text("INSERT INTO demotable (id, name) VALUES (:id, :name)"),
            {'id': id, 'name': name}
        )
        connection.commit()
        return result.rowcount > 0

    return with_connection(action)


def update_name_demotable(old_name, new_name) -> bool:
    """Переименовывает все строки с old_name. False, если таких нет."""
    def action(connection):
        result = connection.execute(
            db.text("UPDATE demotable SET name = :new_name WHERE name = :old_name"),
            {'new_name': new_name, 'old_name': old_name}
        )
        connection.commit()
        return result.rowcount > 0

    return with_connection(action)


def count_demotable() -> int:
    return with_connection(
        lambda connection: int(connection.execute(db.text("SELECT COUNT(*) FROM demotable")).scalar())
    )
