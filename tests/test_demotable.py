from tourism_app.services import demotable


def test_insert_update_and_fetch_scenario(client):
    assert client.post('/insert-demotable', json={'id': 1, 'name': 'Alice'}).get_json() == {'success': True}
    assert client.get('/count-demotable').get_json() == {'success': True, 'count': 1}

    response = client.post('/update-name-demotable', json={'oldName': 'Alice', 'newName': 'Bob'})
    assert response.get_json() == {'success': True}

    assert client.get('/demotable').get_json() == {'data': [[1, 'Bob']]}


def test_count_grows_by_one_after_insert(app_ctx):
    before = demotable.count_demotable()
    assert demotable.insert_demotable(7, 'Carol') is True
    assert demotable.count_demotable() == before + 1


def test_update_missing_name_returns_false(app_ctx):
    demotable.insert_demotable(1, 'Alice')
    assert demotable.update_name_demotable('Nobody', 'Bob') is False
    assert demotable.fetch_demotable() == [[1, 'Alice']]


def test_update_renames_every_match(app_ctx):
    demotable.insert_demotable(1, 'Alice')
    demotable.insert_demotable(2, 'Alice')
    assert demotable.update_name_demotable('Alice', 'Bob') is True
    assert demotable.fetch_demotable() == [[1, 'Bob'], [2, 'Bob']]


def test_update_missing_name_route_fails(client):
    response = client.post('/update-name-demotable', json={'oldName': 'Nobody', 'newName': 'Bob'})
    assert response.status_code == 500
    assert response.get_json() == {'success': False}


def test_duplicate_id_insert_fails(client):
    client.post('/insert-demotable', json={'id': 1, 'name': 'Alice'})
    response = client.post('/insert-demotable', json={'id': 1, 'name': 'Alice again'})
    assert response.status_code == 500
    assert response.get_json() == {'success': False}
    assert client.get('/count-demotable').get_json()['count'] == 1


def test_insert_requires_numeric_id(client):
    response = client.post('/insert-demotable', json={'id': 'one', 'name': 'Alice'})
    assert response.status_code == 400
