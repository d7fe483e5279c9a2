"""
Tests for the TapCalc web API
"""
import pytest

import api
import keymap
from calculator import CalculatorEngine


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api, "engine", CalculatorEngine())
    api.app.config['TESTING'] = True
    with api.app.test_client() as client:
        yield client


def send(client, command, arg=None):
    return client.post('/api/command', json={'command': command, 'arg': arg})


def test_api_info(client):
    body = client.get('/api').get_json()
    assert body['success']
    assert 'operator' in body['data']['commands']


def test_initial_state(client):
    body = client.get('/api/state').get_json()
    assert body['success']
    assert body['data']['display'] == "0"
    assert body['data']['history'] == ""
    assert body['data']['memory_active'] is False


def test_chained_calculation(client):
    for command, arg in [('digit', '5'), ('operator', '+'), ('digit', '3'), ('operator', '=')]:
        resp = send(client, command, arg)
        assert resp.status_code == 200
    data = resp.get_json()['data']
    assert data['display'] == "8"
    assert data['history'] == "5+3=8"


def test_memory_indicator(client):
    send(client, 'digit', '4')
    data = send(client, 'memory', 'M+').get_json()['data']
    assert data['memory_active'] is True


def test_rejected_command_is_reported(client):
    send(client, 'digit', '5')
    send(client, 'operator', '÷')
    send(client, 'digit', '0')
    send(client, 'operator', '=')
    body = send(client, 'digit', '1').get_json()
    assert body['success']
    assert body['accepted'] is False
    assert body['data']['locked'] is True
    assert body['data']['display'] == "Infinity"


def test_clear(client):
    send(client, 'digit', '9')
    body = client.post('/api/clear').get_json()
    assert body['data']['display'] == "0"


@pytest.mark.parametrize("payload", [
    {'command': 'explode'},
    {'command': 'digit', 'arg': '12'},
    {'command': 'digit'},
    {'command': 'operator', 'arg': '%'},
    {'command': 'memory', 'arg': 'MX'},
    {'command': ['digit']},
])
def test_bad_commands(client, payload):
    resp = client.post('/api/command', json=payload)
    assert resp.status_code == 400
    assert resp.get_json()['success'] is False


def test_non_json_body(client):
    resp = client.post('/api/command', data="digit 5", content_type="text/plain")
    assert resp.status_code == 400


def test_keymap(client):
    body = client.get('/api/keymap').get_json()
    assert body['count'] == len(keymap.KEY_BINDINGS)
    assert {'label': "√", 'shortcut': "Alt+/", 'command': "square_root", 'arg': None} in body['data']
