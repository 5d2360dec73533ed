# tourism_app/celery/tasks.py
from celery.utils.log import get_task_logger
from tourism_app.celery.celery_app import celery
from tourism_app.services.exceptions import DataAccessError
from tourism_app.services.load_data import load_seed_data

task_logger = get_task_logger(__name__)


@celery.task(bind=True, name='repopulate_tables_task')
def repopulate_tables_task(self, seed_dir: str):
    """
    Фоновая задача: перезаполнить таблицы начальными данными из CSV.
    """
    # create_app импортируется при старте задачи, чтобы не было circular import
    from tourism_app import create_app

    app = create_app()
    with app.app_context():
        try:
            counts = load_seed_data(seed_dir)
        except DataAccessError as e:
            task_logger.exception(f"Ошибка перезаполнения таблиц из {seed_dir}: {e}")
            # пробуем ещё 3 раза с задержкой
            raise self.retry(exc=e, countdown=10, max_retries=3)
    task_logger.info(f"Таблицы перезаполнены: {counts}")
    return {"status": "ok", "counts": counts}
