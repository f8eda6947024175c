import pytest

from backend.models.sesion import Sesion

ANA = {'nombres': 'Ana', 'apellidos': 'Lopez', 'matricula': 'A001', 'promedio': 9.5}


def _create_alumno(client, **overrides) -> int:
    response = client.post('/alumnos', json={**ANA, **overrides})
    assert response.status_code == 201
    return response.json()['id']


def _login(client, alumno_id: int, password: str = 'secreto'):
    return client.post(f'/alumnos/{alumno_id}/session/login', json={'password': password})


@pytest.fixture(params=['client', 'memory_client'])
def any_client(request):
    return request.getfixturevalue(request.param)


def test_login_verify_logout_lifecycle(any_client) -> None:
    alumno_id = _create_alumno(any_client, password='secreto')

    login = _login(any_client, alumno_id)
    assert login.status_code == 200
    token = login.json()['token']

    verified = any_client.post(f'/alumnos/{alumno_id}/session/verify', json={'sessionString': token})
    assert verified.status_code == 200
    session = verified.json()['session']
    assert session['active'] is True
    assert session['alumnoId'] == alumno_id
    assert session['sessionString'] == token
    assert session['id'] != token

    logout = any_client.post(f'/alumnos/{alumno_id}/session/logout', json={'sessionString': token})
    assert logout.status_code == 200

    after = any_client.post(f'/alumnos/{alumno_id}/session/verify', json={'sessionString': token})
    assert after.status_code == 400


def test_login_issues_distinct_tokens(client) -> None:
    alumno_id = _create_alumno(client, password='secreto')

    first = _login(client, alumno_id).json()['token']
    second = _login(client, alumno_id).json()['token']

    assert first != second


def test_login_unknown_alumno_returns_not_found(client) -> None:
    response = _login(client, 999)

    assert response.status_code == 404


def test_login_with_wrong_password_is_rejected(client) -> None:
    alumno_id = _create_alumno(client, password='secreto')

    response = _login(client, alumno_id, password='otra')

    assert response.status_code == 400
    assert response.json() == {'error': 'Contraseña incorrecta'}


def test_login_without_stored_password_is_rejected(client) -> None:
    alumno_id = _create_alumno(client)

    response = _login(client, alumno_id)

    assert response.status_code == 400


def test_login_requires_password_in_body(client) -> None:
    alumno_id = _create_alumno(client, password='secreto')

    response = client.post(f'/alumnos/{alumno_id}/session/login', json={})

    assert response.status_code == 400


def test_password_is_stored_hashed(client, db_session) -> None:
    _create_alumno(client, password='secreto')

    from backend.models.alumno import Alumno

    stored = db_session.query(Alumno).one()
    assert stored.password_hash and stored.password_hash != 'secreto'


def test_update_without_password_keeps_login_working(client) -> None:
    alumno_id = _create_alumno(client, password='secreto')

    client.put(f'/alumnos/{alumno_id}', json={**ANA, 'promedio': 7})

    assert _login(client, alumno_id).status_code == 200


@pytest.mark.parametrize('action', ['verify', 'logout'])
def test_session_endpoints_require_session_string(client, action: str) -> None:
    response = client.post(f'/alumnos/1/session/{action}', json={})

    assert response.status_code == 400


@pytest.mark.parametrize('action', ['verify', 'logout'])
def test_unknown_session_string_is_rejected(client, action: str) -> None:
    response = client.post(f'/alumnos/1/session/{action}', json={'sessionString': 'nope'})

    assert response.status_code == 400


def test_logout_of_inactive_session_still_succeeds(client) -> None:
    alumno_id = _create_alumno(client, password='secreto')
    token = _login(client, alumno_id).json()['token']
    client.post(f'/alumnos/{alumno_id}/session/logout', json={'sessionString': token})

    response = client.post(f'/alumnos/{alumno_id}/session/logout', json={'sessionString': token})

    assert response.status_code == 200


def test_logout_only_deactivates_the_session(client, db_session) -> None:
    alumno_id = _create_alumno(client, password='secreto')
    token = _login(client, alumno_id).json()['token']

    client.post(f'/alumnos/{alumno_id}/session/logout', json={'sessionString': token})

    stored = db_session.query(Sesion).filter(Sesion.session_string == token).one()
    assert stored.active is False
