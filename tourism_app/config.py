import os
from dotenv import load_dotenv

load_dotenv()
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_flag(name, default='false'):
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    DB_USER = os.getenv('DB_USER')
    DB_PASSWORD = os.getenv('DB_PASSWORD')
    DB_HOST = os.getenv('DB_HOST', 'localhost')
    DB_PORT = os.getenv('DB_PORT', '5432')
    DB_NAME = os.getenv('DB_NAME')

    DATABASE_URL = os.getenv('DATABASE_URL') or (
        f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    )

    # Обязательный параметр для Flask-SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Пул соединений: min 1 / max 3 / шаг 1
    DB_POOL_MIN = int(os.getenv('DB_POOL_MIN', 1))
    DB_POOL_MAX = int(os.getenv('DB_POOL_MAX', 3))
    DB_POOL_TIMEOUT = int(os.getenv('DB_POOL_TIMEOUT', 60))
    DB_POOL_GRACE_PERIOD = int(os.getenv('DB_POOL_GRACE_PERIOD', 10))
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': DB_POOL_MIN,
        'max_overflow': DB_POOL_MAX - DB_POOL_MIN,
        'pool_timeout': DB_POOL_TIMEOUT,
        'pool_pre_ping': True,
    }

    SEED_DATA_DIR = os.path.join(PROJECT_ROOT, 'data', 'seed')
    SEED_ON_START = _env_flag('SEED_ON_START')
    AUTO_CREATE_TABLES = _env_flag('AUTO_CREATE_TABLES', 'true')
    LOG_DIR = os.path.join(BASE_DIR, 'logs')

    REDIS_URL = os.getenv('REDIS_URL', os.getenv('CELERY_BROKER_URL'))
    CACHE_TYPE = os.getenv('CACHE_TYPE', 'RedisCache' if REDIS_URL else 'SimpleCache')
    CACHE_REDIS_URL = REDIS_URL
    CACHE_DEFAULT_TIMEOUT = 300

    CELERY_BROKER_URL = REDIS_URL
    CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', REDIS_URL)

    # Адрес API для клиентских команд
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:5000')
