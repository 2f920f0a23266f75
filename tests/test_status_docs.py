def test_status(client):
    response = client.get('/status')

    assert response.status_code == 200
    assert response.get_json() == {'status': 'Up', 'frontend': 'http://frontend.test'}


def test_openapi_document_lists_routes(client):
    response = client.get('/api/docs/openapi.json')

    assert response.status_code == 200
    document = response.get_json()
    assert document['openapi'] == '3.0.0'
    paths = document['paths']
    assert set(paths['/animals']) == {'get', 'post'}
    assert 'parameters' in paths['/animals/{record_id}']['patch']
    assert paths['/status']['get']['security'] == []
    assert 'security' not in paths['/farmhouse']['post']
    assert paths['/farmhouse']['get']['security'] == []
    assert not any(path.startswith('/alerts/{feed_path}') for path in paths)


def test_swagger_ui_page(client):
    response = client.get('/api/docs')

    assert response.status_code == 200
    assert response.mimetype == 'text/html'
    assert b'/api/docs/openapi.json' in response.data


def test_unknown_route_returns_json_error(client):
    response = client.get('/no-such-route')

    assert response.status_code == 404
    assert 'error' in response.get_json()
