# tourism_app/services/exceptions.py


class TourismError(Exception):
    """Базовая ошибка слоя доступа к данным."""


class DataAccessError(TourismError):
    """Сбой подключения к БД или выполнения SQL."""


class LocationConflictError(TourismError):
    """Координаты уже привязаны к другой провинции/городу."""

    def __init__(self, latitude, longitude, province, city):
        super().__init__(
            f"Координаты ({latitude}, {longitude}) уже относятся к {province}, {city}"
        )
        self.latitude = latitude
        self.longitude = longitude
        self.province = province
        self.city = city


class InvalidColumnError(TourismError, ValueError):
    """Недопустимый набор столбцов для проекции."""


class InvalidComparisonError(TourismError, ValueError):
    """Недопустимый оператор сравнения."""
