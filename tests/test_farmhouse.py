from farmhome.models.alert import Alert


def _create(client, headers, **body):
    payload = {'Name': 'North Barn', 'location': 'Lahore'}
    payload.update(body)
    return client.post('/farmhouse', json=payload, headers=headers)


def test_admin_creates_and_lists_farmhouses(client, token_for):
    admin, headers = token_for('admin')

    response = _create(client, headers, manager_id='m1', assistants=['s1'])

    assert response.status_code == 201
    farmhouse = response.get_json()
    assert farmhouse['name'] == 'North Barn'
    assert farmhouse['admin'] == str(admin['_id'])
    assert farmhouse['f_id'].startswith('FARM-')
    assert farmhouse['assistants'] == ['s1']

    public = client.get('/farmhouse')
    assert public.status_code == 200
    assert [item['_id'] for item in public.get_json()] == [farmhouse['_id']]

    mine = client.get('/farmhouse/admin', headers=headers)
    assert [item['_id'] for item in mine.get_json()] == [farmhouse['_id']]


def test_create_requires_admin_and_name(client, token_for):
    _, manager_headers = token_for('manager')
    _, admin_headers = token_for('admin')

    assert _create(client, manager_headers).status_code == 403

    response = client.post('/farmhouse', json={'location': 'Lahore'}, headers=admin_headers)
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Name is required'

    bad_assistants = _create(client, admin_headers, assistants='s1')
    assert bad_assistants.status_code == 400


def test_role_listings_are_gated_by_role(client, token_for):
    _, admin_headers = token_for('admin')
    manager, manager_headers = token_for('manager')
    assistant, assistant_headers = token_for('assistant')
    _create(client, admin_headers, manager_id=str(manager['_id']), assistants=[str(assistant['_id'])])

    assert len(client.get('/farmhouse/manager', headers=manager_headers).get_json()) == 1
    assert len(client.get('/farmhouse/assistant', headers=assistant_headers).get_json()) == 1

    denied = client.get('/farmhouse/admin', headers=manager_headers)
    assert denied.status_code == 403
    assert denied.get_json()['error'] == 'Access denied. Admins only.'
    assert client.get('/farmhouse/manager', headers=assistant_headers).status_code == 403


def test_only_owning_admin_can_read_update_delete(client, token_for):
    _, owner_headers = token_for('admin')
    _, other_headers = token_for('admin')
    farmhouse_id = _create(client, owner_headers).get_json()['_id']

    assert client.get(f'/farmhouse/{farmhouse_id}', headers=owner_headers).status_code == 200
    assert client.get(f'/farmhouse/{farmhouse_id}', headers=other_headers).status_code == 404

    forbidden = client.put(f'/farmhouse/{farmhouse_id}', json={'Name': 'Hijacked'}, headers=other_headers)
    assert forbidden.status_code == 403
    assert forbidden.get_json()['error'] == 'Access denied. You are not the admin of this farmhouse.'

    updated = client.put(
        f'/farmhouse/{farmhouse_id}', json={'Name': 'South Barn', 'location': 'Multan'}, headers=owner_headers
    )
    assert updated.status_code == 200
    assert updated.get_json()['name'] == 'South Barn'
    assert updated.get_json()['location'] == 'Multan'

    assert client.delete(f'/farmhouse/{farmhouse_id}', headers=other_headers).status_code == 403
    deleted = client.delete(f'/farmhouse/{farmhouse_id}', headers=owner_headers)
    assert deleted.get_json()['message'] == 'Farmhouse deleted'
    assert client.delete(f'/farmhouse/{farmhouse_id}', headers=owner_headers).status_code == 404


def test_partial_update_keeps_fields_not_sent(client, token_for, mongo_db):
    admin, headers = token_for('admin')
    farmhouse_id = _create(client, headers, manager_id='m1', assistants=['s1']).get_json()['_id']
    Alert.create_alert({'title': 'Heatwave', 'category': 'weather', 'location': 'Lahore'})

    relocated = client.patch(f'/farmhouse/{farmhouse_id}', json={'location': 'Multan'}, headers=headers)
    assert relocated.status_code == 200
    farmhouse = relocated.get_json()
    assert farmhouse['name'] == 'North Barn'
    assert farmhouse['manager'] == 'm1'
    assert farmhouse['assistants'] == ['s1']
    assert farmhouse['location'] == 'Multan'

    renamed = client.put(f'/farmhouse/{farmhouse_id}', json={'name': 'North Two', 'location': 'Lahore'}, headers=headers)
    assert renamed.status_code == 200
    assert renamed.get_json()['name'] == 'North Two'
    assert renamed.get_json()['manager'] == 'm1'
    assert renamed.get_json()['assistants'] == ['s1']

    visible = client.get(f"/alerts/by-admin/{admin['_id']}")
    assert [alert['title'] for alert in visible.get_json()] == ['Heatwave']
    assert [alert['title'] for alert in client.get('/alerts/by-manager/m1').get_json()] == ['Heatwave']


def test_update_rejects_blank_name_and_bad_assistants(client, token_for, mongo_db):
    _, headers = token_for('admin')
    farmhouse_id = _create(client, headers, manager_id='m1').get_json()['_id']

    blank = client.patch(f'/farmhouse/{farmhouse_id}', json={'Name': '  '}, headers=headers)
    assert blank.status_code == 400
    assert blank.get_json()['error'] == 'Name is required'

    bad_assistants = client.patch(f'/farmhouse/{farmhouse_id}', json={'assistants': 's1'}, headers=headers)
    assert bad_assistants.status_code == 400
    assert bad_assistants.get_json()['error'] == 'assistants must be an array of user ids'

    empty = client.patch(f'/farmhouse/{farmhouse_id}', json={}, headers=headers)
    assert empty.status_code == 400
    assert empty.get_json()['error'] == 'No updatable fields provided'

    stored = mongo_db.farmhouses.find_one()
    assert stored['name'] == 'North Barn'
    assert stored['manager'] == 'm1'


def test_invalid_farmhouse_id(client, token_for):
    _, headers = token_for('admin')

    assert client.get('/farmhouse/nope', headers=headers).status_code == 400
    assert client.delete('/farmhouse/nope', headers=headers).status_code == 400
