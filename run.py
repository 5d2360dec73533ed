# run.py
# Локальный запуск: python run.py (в проде: gunicorn "tourism_app:create_app()")
import os

from tourism_app import create_app
from tourism_app.services.pool import close_pool

app = create_app()


if __name__ == '__main__':
    try:
        app.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)))
    finally:
        # пул принадлежит приложению и закрывается вместе с ним
        with app.app_context():
            close_pool(grace_period=app.config['DB_POOL_GRACE_PERIOD'])
