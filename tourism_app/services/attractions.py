# tourism_app/services/attractions.py

from tourism_app.extensions import db, cache
from tourism_app.services.exceptions import LocationConflictError
from tourism_app.services.pool import with_connection
from tourism_app.utils.logger import logger

SELECT_ATTRACTIONS = db.text("""
    SELECT a.attraction_id, a.attraction_name
    FROM attraction_sites s
    JOIN attractions a ON s.latitude = a.latitude AND s.longitude = a.longitude
    WHERE s.province = :province AND s.city = :city
    ORDER BY a.attraction_id
""")

SELECT_ALL_ATTRACTIONS = db.text(
    "SELECT attraction_id, attraction_name FROM attractions ORDER BY attraction_id"
)

COUNT_ATTRACTIONS = db.text("""
    SELECT COUNT(*)
    FROM attraction_sites s
    JOIN attractions a ON s.latitude = a.latitude AND s.longitude = a.longitude
    WHERE s.province = :province AND s.city = :city
""")

INSERT_LOCATION = db.text("""
    INSERT INTO locations (province, city)
    VALUES (:province, :city)
    ON CONFLICT DO NOTHING
""")

INSERT_SITE = db.text("""
    INSERT INTO attraction_sites (latitude, longitude, province, city)
    VALUES (:latitude, :longitude, :province, :city)
    ON CONFLICT DO NOTHING
""")

SELECT_SITE_LOCATION = db.text("""
    SELECT province, city
    FROM attraction_sites
    WHERE latitude = :latitude AND longitude = :longitude
""")

INSERT_ATTRACTION = db.text("""
    INSERT INTO attractions (attraction_name, attraction_desc, category,
                             opening_hour, closing_hour, latitude, longitude)
    VALUES (:name, :description, :category, :opening_hour, :closing_hour,
            :latitude, :longitude)
""")

SELECT_ATTRACTION_LOCATION = db.text("""
    SELECT a.latitude, a.longitude, s.province, s.city
    FROM attractions a
    JOIN attraction_sites s ON s.latitude = a.latitude AND s.longitude = a.longitude
    WHERE a.attraction_id = :attraction_id
""")

DELETE_PARTICIPATIONS = db.text("""
    DELETE FROM participations
    WHERE experience_id IN (
        SELECT experience_id FROM experiences WHERE attraction_id = :attraction_id
    )
""")
DELETE_EXPERIENCES = db.text("DELETE FROM experiences WHERE attraction_id = :attraction_id")
DELETE_ATTRACTION = db.text("DELETE FROM attractions WHERE attraction_id = :attraction_id")

CITIES_HAVING = """
    SELECT s.province, s.city, COUNT(*) AS attraction_count
    FROM attraction_sites s
    JOIN attractions a ON s.latitude = a.latitude AND s.longitude = a.longitude
    {where}
    GROUP BY s.province, s.city
    HAVING COUNT(*) > :min_count
    ORDER BY s.province, s.city
"""

AVG_PER_PROVINCE = db.text("""
    SELECT per_city.province, AVG(per_city.attraction_count)
    FROM (
        SELECT s.province, s.city, COUNT(*) AS attraction_count
        FROM attraction_sites s
        JOIN attractions a ON s.latitude = a.latitude AND s.longitude = a.longitude
        GROUP BY s.province, s.city
    ) per_city
    GROUP BY per_city.province
    ORDER BY per_city.province
""")

# Поля, которые можно менять через update_attraction: имя аргумента -> столбец
UPDATABLE_FIELDS = {
    'name':         'attraction_name',
    'description':  'attraction_desc',
    'category':     'category',
    'opening_hour': 'opening_hour',
    'closing_hour': 'closing_hour',
}


def _rows(result):
    return [list(row) for row in result]


def list_attractions(province, city):
    """Достопримечательности города: [[id, name], ...]. Пустой список, если ничего нет."""
    return with_connection(
        lambda connection: _rows(
            connection.execute(SELECT_ATTRACTIONS, {'province': province, 'city': city})
        )
    )


def all_attractions():
    return with_connection(
        lambda connection: _rows(connection.execute(SELECT_ALL_ATTRACTIONS))
    )


def count_attractions(province, city) -> int:
    return with_connection(
        lambda connection: int(
            connection.execute(COUNT_ATTRACTIONS, {'province': province, 'city': city}).scalar()
        )
    )


def _ensure_location(connection, province, city):
    connection.execute(INSERT_LOCATION, {'province': province, 'city': city})


def _ensure_site(connection, latitude, longitude, province, city):
    """
    Гарантирует строку координат для (province, city).
    Если координаты уже заняты другой локацией, бросает LocationConflictError.
    """
    _ensure_location(connection, province, city)
    params = {'latitude': latitude, 'longitude': longitude}
    connection.execute(INSERT_SITE, {**params, 'province': province, 'city': city})

    existing = connection.execute(SELECT_SITE_LOCATION, params).one()
    if (existing.province, existing.city) != (province, city):
        raise LocationConflictError(latitude, longitude, existing.province, existing.city)


def add_attraction(name, description, open_hour, close_hour,
                   lat, long, category, province, city) -> bool:
    """
    Добавляет достопримечательность.
    Локация -> координаты -> описание вставляются в одной транзакции,
    уже существующие локация и координаты не дублируются.
    """
    logger.info(f"Добавление достопримечательности '{name}' ({lat}, {long}) в {province}, {city}")

    def action(connection):
        with connection.begin():
            _ensure_site(connection, lat, long, province, city)
            result = connection.execute(INSERT_ATTRACTION, {
                'name': name,
                'description': description,
                'category': category,
                'opening_hour': open_hour,
                'closing_hour': close_hour,
                'latitude': lat,
                'longitude': long,
            })
        return result.rowcount > 0

    inserted = with_connection(action)
    invalidate_statistics()
    return inserted


def update_attraction(attraction_id, latitude=None, longitude=None, **changes) -> bool:
    """
    Обновляет поля достопримечательности. False, если такой записи нет.
    При смене координат новая строка координат создаётся в той же локации.
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Неизвестные поля: {', '.join(sorted(unknown))}")

    assignments = {UPDATABLE_FIELDS[key]: value for key, value in changes.items() if value is not None}

    def action(connection):
        with connection.begin():
            current = connection.execute(
                SELECT_ATTRACTION_LOCATION, {'attraction_id': attraction_id}
            ).first()
            if current is None:
                return False

            if latitude is not None or longitude is not None:
                new_lat = current.latitude if latitude is None else latitude
                new_long = current.longitude if longitude is None else longitude
                _ensure_site(connection, new_lat, new_long, current.province, current.city)
                assignments['latitude'] = new_lat
                assignments['longitude'] = new_long

            if not assignments:
                return True

            set_clause = ', '.join(f"{column} = :{column}" for column in assignments)
            result = connection.execute(
                db.text(f"UPDATE attractions SET {set_clause} WHERE attraction_id = :attraction_id"),
                {**assignments, 'attraction_id': attraction_id}
            )
            return result.rowcount > 0

    updated = with_connection(action)
    if updated:
        invalidate_statistics()
    return updated


def delete_attraction(attraction_id) -> bool:
    """Удаляет достопримечательность вместе с её впечатлениями и посещениями."""
    params = {'attraction_id': attraction_id}

    def action(connection):
        with connection.begin():
            connection.execute(DELETE_PARTICIPATIONS, params)
            connection.execute(DELETE_EXPERIENCES, params)
            result = connection.execute(DELETE_ATTRACTION, params)
        return result.rowcount > 0

    deleted = with_connection(action)
    if deleted:
        logger.info(f"Достопримечательность {attraction_id} удалена")
        invalidate_statistics()
    return deleted


def cities_with_min_attractions(min_count, province=None, city=None):
    """
    Города, где достопримечательностей больше min_count: [[province, city, count], ...].
    province и city сужают выборку, если заданы.
    """
    params = {'min_count': min_count}
    conditions = []
    if province:
        conditions.append('s.province = :province')
        params['province'] = province
    if city:
        conditions.append('s.city = :city')
        params['city'] = city
    where = 'WHERE ' + ' AND '.join(conditions) if conditions else ''
    query = db.text(CITIES_HAVING.format(where=where))

    return with_connection(
        lambda connection: [
            [row.province, row.city, int(row.attraction_count)]
            for row in connection.execute(query, params)
        ]
    )


@cache.memoize(timeout=300)
def average_attractions_per_province():
    """Среднее число достопримечательностей на город по провинциям."""
    return with_connection(
        lambda connection: [
            [province, float(average)]
            for province, average in connection.execute(AVG_PER_PROVINCE)
        ]
    )


def invalidate_statistics():
    cache.delete_memoized(average_attractions_per_province)
