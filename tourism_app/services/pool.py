# tourism_app/services/pool.py

import time
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from tourism_app.extensions import db
from tourism_app.services.exceptions import DataAccessError
from tourism_app.utils.logger import logger


@contextmanager
def pooled_connection():
    """
    Берёт соединение из пула движка и возвращает его в пул при любом выходе.
    Ошибки SQLAlchemy превращаются в DataAccessError.
    """
    try:
        with db.engine.connect() as connection:
            yield connection
    except SQLAlchemyError as e:
        logger.error(f"Ошибка работы с БД: {e}")
        raise DataAccessError(str(e)) from e


def with_connection(action):
    """Выполняет action(connection) на соединении из пула и отдаёт его результат."""
    with pooled_connection() as connection:
        return action(connection)


def ping_database() -> bool:
    """Проверяет, что из пула можно получить рабочее соединение."""
    try:
        with_connection(lambda connection: connection.execute(db.text("SELECT 1")).scalar())
    except DataAccessError:
        return False
    return True


def close_pool(grace_period: float = 10, poll_interval: float = 0.1):
    """
    Закрывает пул: ждёт до grace_period секунд, пока вернутся выданные
    соединения, затем освобождает движок.
    """
    engine = db.engine
    checked_out = getattr(engine.pool, 'checkedout', None)
    if checked_out is not None:
        deadline = time.monotonic() + grace_period
        while checked_out() > 0 and time.monotonic() < deadline:
            time.sleep(poll_interval)
        if checked_out() > 0:
            logger.warning(f"Пул закрывается с {checked_out()} незавершёнными соединениями")
    engine.dispose()
    logger.info("Пул соединений закрыт")
