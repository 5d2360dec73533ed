# tourism_app/utils/logger.py

import logging
import os
import sys
import re
from logging.handlers import RotatingFileHandler

LOGGER_NAME = 'tourism_app'
ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

# Логгер уровня модуля, им пользуются сервисы и маршруты
logger = logging.getLogger(LOGGER_NAME)


class NoAnsiFilter(logging.Filter):
    """Убирает ANSI-коды из сообщений, которые пишутся в файл."""

    def filter(self, record):
        record.msg = ANSI_ESCAPE.sub('', str(record.msg))
        return True


def setup_logger(log_dir, level=logging.INFO):
    """
    Настраивает логгер приложения.
    Логи пишутся в консоль и в файл app.log с ротацией.
    """
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Обработчики добавляются только один раз, даже если create_app вызывают повторно
    if not logger.handlers:
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'app.log'),
            maxBytes=1024*1024,  # 1 MB
            backupCount=5
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(NoAnsiFilter())
        logger.addHandler(file_handler)

    return logger
