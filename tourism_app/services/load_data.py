# tourism_app/services/load_data.py

import os

import pandas as pd

from tourism_app.extensions import db
from tourism_app.services.attractions import invalidate_statistics
from tourism_app.services.pool import with_connection
from tourism_app.utils.logger import logger

# Порядок важен: таблицы заполняются сверху вниз, очищаются снизу вверх
SEED_TABLES = [
    ('locations',        ['province', 'city']),
    ('attraction_sites', ['latitude', 'longitude', 'province', 'city']),
    ('attractions',      ['attraction_id', 'attraction_name', 'attraction_desc', 'category',
                          'opening_hour', 'closing_hour', 'latitude', 'longitude']),
    ('experiences',      ['experience_id', 'experience_name', 'experience_desc', 'company',
                          'price', 'attraction_id']),
    ('app_users',        ['user_id', 'user_name']),
    ('participations',   ['user_id', 'experience_id']),
]

TEXT_COLUMNS = {
    'province', 'city', 'attraction_name', 'attraction_desc', 'category',
    'opening_hour', 'closing_hour', 'experience_name', 'experience_desc',
    'company', 'user_name',
}


def _read_seed_table(seed_dir: str, table: str, columns: list[str]) -> list[dict]:
    """
    Читает CSV таблицы и возвращает записи для executemany.
    Пустые ячейки превращаются в None.
    """
    csv_path = os.path.join(seed_dir, f"{table}.csv")
    if not os.path.exists(csv_path):
        logger.error(f"CSV-файл не найден: {csv_path}")
        raise FileNotFoundError(f"CSV-файл не найден: {csv_path}")

    dtype = {c: str for c in columns if c in TEXT_COLUMNS}
    # round_trip: координаты должны совпадать с float(...) из запросов побитово
    df = pd.read_csv(
        csv_path,
        usecols=lambda c: c in columns,
        dtype=dtype,
        keep_default_na=False,
        na_values=[''],
        float_precision='round_trip'
    )

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ValueError(f"В {csv_path} нет столбцов: {missing}")

    df = df[columns].astype(object).where(df[columns].notna(), None)
    logger.info(f"{table}: прочитано {len(df)} строк из {csv_path}")
    return df.to_dict(orient='records')


def load_seed_data(seed_dir: str) -> dict:
    """
    Перезаполняет таблицы данными из CSV в одной транзакции.
    Возвращает число загруженных строк по таблицам.
    """
    records = {
        table: _read_seed_table(seed_dir, table, columns)
        for table, columns in SEED_TABLES
    }

    def action(connection):
        with connection.begin():
            for table, _ in reversed(SEED_TABLES):
                connection.execute(db.text(f"DELETE FROM {table}"))

            for table, columns in SEED_TABLES:
                rows = records[table]
                if not rows:
                    continue
                insert = db.text(
                    f"INSERT INTO {table} ({', '.join(columns)}) "
                    f"VALUES ({', '.join(':' + c for c in columns)})"
                )
                connection.execute(insert, rows)

            # иначе следующий INSERT в attractions получит уже занятый id
            if connection.dialect.name == 'postgresql':
                connection.execute(db.text(
                    "SELECT setval(pg_get_serial_sequence('attractions', 'attraction_id'), "
                    "COALESCE(MAX(attraction_id), 1)) FROM attractions"
                ))

    with_connection(action)
    invalidate_statistics()

    counts = {table: len(rows) for table, rows in records.items()}
    logger.info(f"Начальные данные загружены: {counts}")
    return counts
