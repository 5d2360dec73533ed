# tourism_app/services/experiences.py

from tourism_app.extensions import db
from tourism_app.services.exceptions import InvalidColumnError, InvalidComparisonError
from tourism_app.services.pool import with_connection

# Разрешённые для проекции атрибуты: имя в API -> столбец в БД
EXPERIENCE_COLUMNS = {
    'experienceID':   'experience_id',
    'experienceName': 'experience_name',
    'experienceDesc': 'experience_desc',
    'company':        'company',
    'price':          'price',
}

COMPARISON_OPERATORS = {
    '<': '<', '<=': '<=', '=': '=', '>=': '>=', '>': '>',
    'less': '<', 'less_equal': '<=', 'equal': '=', 'greater_equal': '>=', 'greater': '>',
}

FIND_COMPLETIONISTS = db.text("""
    SELECT u.user_id, u.user_name
    FROM app_users u
    WHERE EXISTS (SELECT 1 FROM experiences WHERE attraction_id = :attraction_id)
      AND NOT EXISTS (
        SELECT e.experience_id
        FROM experiences e
        WHERE e.attraction_id = :attraction_id
          AND NOT EXISTS (
            SELECT 1
            FROM participations p
            WHERE p.user_id = u.user_id AND p.experience_id = e.experience_id
          )
      )
    ORDER BY u.user_id
""")


def resolve_columns(to_select):
    """Проверяет выбранные атрибуты по белому списку и возвращает имена столбцов."""
    if not to_select:
        raise InvalidColumnError("Нужно выбрать хотя бы один атрибут")

    unknown = [
        name for name in to_select
        if not isinstance(name, str) or name not in EXPERIENCE_COLUMNS
    ]
    if unknown:
        raise InvalidColumnError(f"Недопустимые атрибуты: {', '.join(map(str, unknown))}")

    return [EXPERIENCE_COLUMNS[name] for name in to_select]


def project_experiences(attraction_id, to_select):
    """Впечатления достопримечательности, только выбранные столбцы в заданном порядке."""
    columns = resolve_columns(to_select)
    query = db.text(
        f"SELECT {', '.join(columns)} FROM experiences "
        f"WHERE attraction_id = :attraction_id ORDER BY experience_id"
    )
    return with_connection(
        lambda connection: [
            list(row) for row in connection.execute(query, {'attraction_id': attraction_id})
        ]
    )


def filter_experiences_by_price(price, comparison):
    """[[experience_id, experience_name, price], ...] для цен, удовлетворяющих сравнению."""
    operator = COMPARISON_OPERATORS.get(str(comparison).strip().lower())
    if operator is None:
        raise InvalidComparisonError(f"Недопустимое сравнение: {comparison}")

    query = db.text(
        f"SELECT experience_id, experience_name, price FROM experiences "
        f"WHERE price {operator} :price ORDER BY price, experience_id"
    )
    return with_connection(
        lambda connection: [list(row) for row in connection.execute(query, {'price': price})]
    )


def find_completionists(attraction_id):
    # пользователи, посетившие все впечатления достопримечательности
    return with_connection(
        lambda connection: [
            list(row) for row in connection.execute(FIND_COMPLETIONISTS, {'attraction_id': attraction_id})
        ]
    )
