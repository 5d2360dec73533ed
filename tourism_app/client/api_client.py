# tourism_app/client/api_client.py

import requests

from tourism_app.utils.logger import logger

# Подписи столбцов проекции впечатлений
EXPERIENCE_LABELS = {
    'experienceID':   'Experience ID',
    'experienceName': 'Experience Name',
    'experienceDesc': 'Experience Description',
    'company':        'Host Company',
    'price':          'Experience Price',
}


class ClientError(Exception):
    """Ответ API не OK или не удалось выполнить запрос."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


def retrieve_and_sanitize_text(value) -> str:
    """Текст из поля ввода: без пробелов по краям и в нижнем регистре."""
    if value is None:
        return ''
    return str(value).strip().lower()


class TourismClient:
    """
    Клиент HTTP API достопримечательностей.
    Каждый метод: очистка ввода -> один запрос -> разобранный JSON.
    """

    def __init__(self, base_url, session=None, timeout=30):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Запрос {method} {url} не выполнен: {e}")
            raise ClientError(f"Сетевая ошибка: {e}") from e

        if not response.ok:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise ClientError(
                f"{method} {path} вернул {response.status_code}",
                status_code=response.status_code,
                payload=payload,
            )
        return response

    def _post(self, path, body):
        return self._request('POST', path, json=body).json()

    @staticmethod
    def _require_location(province, city):
        province = retrieve_and_sanitize_text(province)
        city = retrieve_and_sanitize_text(city)
        if not province or not city:
            raise ValueError("Нужно указать и провинцию, и город")
        return province, city

    def check_db_connection(self) -> str:
        return self._request('GET', '/check-db-connection').text

    def get_attractions(self, province, city):
        province, city = self._require_location(province, city)
        return self._post('/get-attractions', {'province': province, 'city': city})['data']

    def add_attraction(self, name, description, open_hour, close_hour,
                       lat, long, category, province, city) -> bool:
        body = {
            'name':        retrieve_and_sanitize_text(name),
            'description': retrieve_and_sanitize_text(description),
            'open':        retrieve_and_sanitize_text(open_hour),
            'close':       retrieve_and_sanitize_text(close_hour),
            'lat':         lat,
            'long':        long,
            'category':    retrieve_and_sanitize_text(category),
            'province':    retrieve_and_sanitize_text(province),
            'city':        retrieve_and_sanitize_text(city),
        }
        return self._post('/add-attraction', body)['data']

    def count_attractions(self, province, city) -> int:
        province, city = self._require_location(province, city)
        data = self._post('/count-attractions', {'province': province, 'city': city})
        if not data.get('success'):
            raise ClientError("Не удалось посчитать достопримечательности", payload=data)
        return data['count']

    def count_attractions_having(self, min_count, province=None, city=None):
        body = {'minCount': min_count}
        if province:
            body['province'] = retrieve_and_sanitize_text(province)
        if city:
            body['city'] = retrieve_and_sanitize_text(city)
        return self._post('/count-attractions-having', body)['data']

    def avg_attractions_per_province(self):
        return self._request('GET', '/avg-attractions-per-province').json()['data']

    def update_attraction(self, attraction_id, **changes) -> bool:
        body = {'id': attraction_id}
        body.update({f"new{key}": value for key, value in changes.items() if value not in (None, '')})
        return self._post('/update-attraction', body)['success']

    def delete_attraction(self, attraction_id) -> bool:
        return self._request(
            'DELETE', '/delete-attraction', json={'attractionID': attraction_id}
        ).json()['success']

    def filter_experiences(self, price, comparison):
        body = {'price': price, 'comparison': comparison}
        return self._post('/filter-experiences', body)['filteredExperiences']

    def project_experiences(self, attraction_id, selected):
        """Проекция впечатлений; пустой выбор отклоняется до отправки запроса."""
        selected = list(selected or [])
        if not selected:
            raise ValueError("Please select at least 1 attribute")
        body = {'id': attraction_id, 'toSelect': selected}
        return self._post('/project-tables', body)['projectedExperiences']

    def find_completionists(self, attraction_id):
        return self._post('/find-completionists', {'attractionID': attraction_id})['data']

    def repopulate(self):
        return self._request('POST', '/initiate-table').json()['data']
