# tourism_app/__init__.py
from flask import Flask, jsonify
from sqlalchemy import create_engine, text
from tourism_app.config import Config
from tourism_app.utils.logger import setup_logger, logger
from tourism_app.extensions import db, migrate, api, cache
from tourism_app.routes.attractions import ns as attractions_ns
from tourism_app.routes.experiences import ns as experiences_ns
from tourism_app.routes.demotable import ns as demotable_ns
from tourism_app.routes.service import ns as service_ns
from tourism_app.client.cli import client_cli, seed_command

# Namespaces добавляются один раз при импорте, а api.init_app регистрирует
# их ресурсы в каждом приложении, созданном через create_app
for _namespace in (service_ns, attractions_ns, experiences_ns, demotable_ns):
    api.add_namespace(_namespace)


def check_db_connection(database_url):
    """
    Проверяет подключение к базе данных отдельным движком, без пула приложения.
    """
    engine = create_engine(database_url)
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
            logger.info("Успешное подключение к базе данных.")
    except Exception as e:
        logger.error(f"Ошибка подключения к базе данных: {e}")
        raise
    finally:
        engine.dispose()


def init_app(app):
    """
    Начальная подготовка БД при запуске: таблицы и, если нужно, начальные данные.
    """
    from tourism_app.services.attractions import all_attractions
    from tourism_app.services.load_data import load_seed_data
    from tourism_app import models  # noqa: F401 (таблицы для create_all)

    try:
        if app.config.get('AUTO_CREATE_TABLES'):
            db.create_all()
            logger.info("Таблицы созданы (если их не было).")

        if not app.config.get('SEED_ON_START'):
            return

        check_db_connection(app.config['SQLALCHEMY_DATABASE_URI'])

        # Если данные уже есть — пропускаем загрузку
        if all_attractions():
            logger.info("Достопримечательности уже загружены, начальная загрузка пропущена.")
            return

        load_seed_data(app.config['SEED_DATA_DIR'])

    except Exception as e:
        logger.error(f"Ошибка при начальной загрузке данных: {e}")


def create_app(config_object=Config):
    app = Flask(__name__)

    # Загружаем конфигурацию
    app.config.from_object(config_object)

    # Отключаем строгую привязку к слэшу для всех маршрутов
    app.url_map.strict_slashes = False

    # Отключаем "did you mean…" в 404 API-ответах
    app.config['RESTX_ERROR_404_HELP'] = False

    # Создание папки для логов
    setup_logger(log_dir=app.config['LOG_DIR'])

    # Инициализация расширений
    db.init_app(app)
    migrate.init_app(app, db)
    api.init_app(app)
    cache.init_app(app)

    # Клиентские команды: flask client ..., flask seed
    app.cli.add_command(client_cli)
    app.cli.add_command(seed_command)

    @app.errorhandler(404)
    def handle_404(e):
        return jsonify({"error": "Ресурс не найден"}), 404

    @app.errorhandler(405)
    def handle_405(e):
        return jsonify({"error": "Метод не поддерживается"}), 405

    @app.errorhandler(Exception)
    def handle_500(e):
        # сюда попадут все необработанные исключения
        app.logger.exception("Необработанная ошибка")
        return jsonify({"error": "Внутренняя ошибка сервера"}), 500

    # Подготовка БД и начальные данные
    with app.app_context():
        init_app(app)

    return app
