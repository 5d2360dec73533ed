import pytest

from tourism_app.routes import parse_number
from tourism_app.services import attractions, experiences
from tourism_app.services.exceptions import DataAccessError, LocationConflictError

from conftest import count_rows

NEW_ATTRACTION = {
    'name': 'granville island market',
    'description': 'public market under the bridge',
    'open': '09:00',
    'close': '18:00',
    'lat': 49.27218,
    'long': -123.13464,
    'category': 'market',
    'province': 'british columbia',
    'city': 'vancouver',
}


def _add(**overrides):
    data = {**NEW_ATTRACTION, **overrides}
    return attractions.add_attraction(
        data['name'], data['description'], data['open'], data['close'],
        data['lat'], data['long'], data['category'], data['province'], data['city']
    )


def test_unknown_location_returns_empty_list(client, seeded):
    response = client.post('/get-attractions', json={'province': 'nunavut', 'city': 'iqaluit'})
    assert response.status_code == 200
    assert response.get_json() == {'data': []}


def test_list_attractions_by_location(client, seeded):
    response = client.post('/get-attractions', json={'province': 'british columbia', 'city': 'vancouver'})
    assert response.get_json() == {
        'data': [[1, 'stanley park'], [2, 'capilano suspension bridge']]
    }


def test_list_attractions_on_empty_database(app_ctx):
    assert attractions.list_attractions('ontario', 'toronto') == []


def test_add_attraction_with_new_location_creates_one_row_per_table(app_ctx):
    assert _add(province='yukon', city='dawson city', lat=64.06012, long=-139.43318) is True

    assert count_rows('locations') == 1
    assert count_rows('attraction_sites') == 1
    assert count_rows('attractions') == 1
    assert attractions.list_attractions('yukon', 'dawson city') == [[1, 'granville island market']]


def test_add_attraction_does_not_duplicate_location_or_coordinates(app_ctx):
    assert _add() is True
    assert _add(name='second stall') is True

    assert count_rows('locations') == 1
    assert count_rows('attraction_sites') == 1
    assert count_rows('attractions') == 2


def test_add_attraction_reuses_seeded_location(seeded):
    locations_before = count_rows('locations')
    sites_before = count_rows('attraction_sites')

    assert _add() is True

    assert count_rows('locations') == locations_before
    assert count_rows('attraction_sites') == sites_before + 1
    assert attractions.count_attractions('british columbia', 'vancouver') == 3


def test_coordinates_of_another_location_are_a_conflict(seeded):
    locations_before = count_rows('locations')

    with pytest.raises(LocationConflictError):
        _add(lat=49.30425, long=-123.14425, province='alberta', city='calgary')

    # транзакция откатилась целиком, включая новую локацию
    assert count_rows('locations') == locations_before
    assert attractions.list_attractions('alberta', 'calgary') == []


def test_add_attraction_route(client, seeded):
    response = client.post('/add-attraction', json={**NEW_ATTRACTION, 'lat': '49.27218', 'long': '-123.13464'})
    assert response.status_code == 200
    assert response.get_json() == {'data': True}

    listed = client.post('/get-attractions', json={'province': 'british columbia', 'city': 'vancouver'})
    assert [10, 'granville island market'] in listed.get_json()['data']


def test_add_attraction_route_rejects_missing_fields(client, seeded):
    response = client.post('/add-attraction', json={'name': 'nowhere', 'lat': 'north'})
    assert response.status_code == 400
    assert response.get_json()['data'] is False


def test_add_attraction_route_reports_conflict(client, seeded):
    response = client.post('/add-attraction', json={
        **NEW_ATTRACTION, 'lat': 43.64257, 'long': -79.38706, 'province': 'quebec', 'city': 'montreal'
    })
    assert response.status_code == 409
    assert response.get_json()['data'] is False


def test_count_attractions(client, seeded):
    response = client.post('/count-attractions', json={'province': 'ontario', 'city': 'toronto'})
    assert response.get_json() == {'success': True, 'count': 3}


def test_count_attractions_having(client, seeded):
    response = client.post('/count-attractions-having', json={'minCount': 1})
    assert response.get_json() == {
        'success': True,
        'data': [
            ['alberta', 'banff', 2],
            ['british columbia', 'vancouver', 2],
            ['ontario', 'toronto', 3],
        ],
    }

    response = client.post('/count-attractions-having', json={'minCount': 1, 'province': 'ontario'})
    assert response.get_json()['data'] == [['ontario', 'toronto', 3]]


def test_count_attractions_having_narrowed_by_city(client, seeded):
    response = client.post('/count-attractions-having', json={'minCount': 1, 'city': 'banff'})
    assert response.get_json()['data'] == [['alberta', 'banff', 2]]

    response = client.post('/count-attractions-having', json={
        'minCount': 0, 'province': 'british columbia', 'city': 'victoria'
    })
    assert response.get_json()['data'] == [['british columbia', 'victoria', 1]]


def test_count_attractions_having_rejects_bad_threshold(client, seeded):
    response = client.post('/count-attractions-having', json={'minCount': 'many'})
    assert response.status_code == 400


def test_average_per_province_is_refreshed_after_insert(client, seeded):
    response = client.get('/avg-attractions-per-province')
    assert response.get_json() == {
        'success': True,
        'data': [['alberta', 2.0], ['british columbia', 1.5], ['ontario', 3.0], ['quebec', 1.0]],
    }

    client.post('/add-attraction', json={
        **NEW_ATTRACTION, 'lat': 48.42213, 'long': -123.36805, 'city': 'victoria'
    })

    response = client.get('/avg-attractions-per-province')
    assert ['british columbia', 2.0] in response.get_json()['data']


def test_update_attraction(client, seeded):
    response = client.post('/update-attraction', json={'id': 8, 'newname': 'casa loma castle', 'newopen': '10:00'})
    assert response.get_json() == {'success': True}

    listed = client.post('/get-attractions', json={'province': 'ontario', 'city': 'toronto'})
    assert [8, 'casa loma castle'] in listed.get_json()['data']


def test_update_attraction_coordinates_creates_site_in_same_location(seeded):
    sites_before = count_rows('attraction_sites')

    assert attractions.update_attraction(3, latitude=48.42, longitude=-123.368) is True

    assert count_rows('attraction_sites') == sites_before + 1
    assert attractions.list_attractions('british columbia', 'victoria') == [[3, 'parliament buildings']]


def test_update_missing_attraction_returns_404(client, seeded):
    response = client.post('/update-attraction', json={'id': 999, 'newname': 'ghost'})
    assert response.status_code == 404
    assert response.get_json() == {'success': False}


def test_update_attraction_rejects_unknown_fields(seeded):
    with pytest.raises(ValueError):
        attractions.update_attraction(1, rating=5)


def test_delete_attraction_removes_experiences_and_participations(client, seeded):
    experiences_before = count_rows('experiences')
    participations_before = count_rows('participations')

    response = client.delete('/delete-attraction', json={'attractionID': 1})
    assert response.get_json() == {'success': True}

    # у stanley park два впечатления и четыре посещения
    assert count_rows('experiences') == experiences_before - 2
    assert count_rows('participations') == participations_before - 4
    assert attractions.count_attractions('british columbia', 'vancouver') == 1

    response = client.delete('/delete-attraction', json={'attractionID': 1})
    assert response.status_code == 404


def test_initiate_table_restores_seed_data(client, seeded):
    client.delete('/delete-attraction', json={'attractionID': 6})

    response = client.post('/initiate-table')
    body = response.get_json()
    assert response.status_code == 200
    assert body['success'] is True
    assert len(body['data']) == 9
    assert [6, 'cn tower'] in body['data']
    assert body['counts']['experiences'] == 10


SQL_ERROR_TEXT = (
    "(sqlite3.IntegrityError) NOT NULL constraint failed: attraction_sites.latitude\n"
    "[SQL: INSERT INTO attraction_sites (latitude, longitude, province, city) ...]"
)


def _fail(*args, **kwargs):
    raise DataAccessError(SQL_ERROR_TEXT)


@pytest.mark.parametrize('module, function, method, url, payload, expected', [
    (attractions, 'list_attractions', 'post', '/get-attractions',
     {'province': 'ontario', 'city': 'toronto'}, {'data': []}),
    (attractions, 'add_attraction', 'post', '/add-attraction',
     NEW_ATTRACTION, {'data': False}),
    (experiences, 'project_experiences', 'post', '/project-tables',
     {'id': 1, 'toSelect': ['price']}, {'projectedExperiences': []}),
])
def test_database_errors_are_not_sent_to_clients(client, monkeypatch, module, function,
                                                 method, url, payload, expected):
    monkeypatch.setattr(module, function, _fail)

    response = getattr(client, method)(url, json=payload)

    assert response.status_code == 500
    assert response.get_json() == expected
    assert 'SQL' not in response.get_data(as_text=True)


def test_initiate_table_hides_database_errors(client, monkeypatch):
    from tourism_app.routes import service as service_routes

    monkeypatch.setattr(service_routes, 'load_seed_data', _fail)

    response = client.post('/initiate-table')
    assert response.status_code == 500
    assert response.get_json() == {'success': False}


@pytest.mark.parametrize('value, cast, expected', [
    ('49.27', float, 49.27),
    ('7', int, 7),
    ('nan', float, None),
    (float('inf'), int, None),
    ('-Infinity', float, None),
    ('north', float, None),
    ('', float, None),
])
def test_parse_number_accepts_only_finite_numbers(value, cast, expected):
    assert parse_number(value, cast) == expected


def test_non_finite_numbers_are_rejected_by_routes(client, seeded):
    response = client.post(
        '/update-attraction', data='{"id": Infinity, "newname": "x"}', content_type='application/json'
    )
    assert response.status_code == 400

    response = client.post('/add-attraction', json={**NEW_ATTRACTION, 'lat': 'nan', 'long': 'nan'})
    assert response.status_code == 400
    assert count_rows('attraction_sites') == 9
