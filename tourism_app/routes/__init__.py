import math

from flask import request


def json_payload() -> dict:
    """Тело запроса как dict; пустой dict, если JSON нет или он не объект."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def parse_number(value, cast=float):
    """Приводит значение к конечному числу, None если не получилось."""
    if value is None or value == '':
        return None
    try:
        number = float(value)
        if not math.isfinite(number):
            return None
        return cast(value)
    except (TypeError, ValueError, OverflowError):
        return None
