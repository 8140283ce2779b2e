import logging

import pytest
from fastapi.testclient import TestClient

from httpkit import main as main_module
from httpkit.app import create_app


@pytest.fixture
def client():
    app = create_app(users={"alice": "secret"}, disallowed=["admin", "secret"], blocked_code=403)
    return TestClient(app, raise_server_exceptions=False)


def test_root_reports_service(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["service"] == "httpkit example"
    assert response.headers["access-control-allow-origin"] == "*"


def test_blocked_path_uses_json_errors_and_cors(client):
    response = client.get("/admin/users")
    assert response.status_code == 403
    assert response.json() == {"status": "Forbidden", "code": 403}
    assert response.headers["access-control-allow-origin"] == "*"


def test_static_js_is_compressed(client):
    response = client.get("/static/app.js", headers={"Accept-Encoding": "gzip"})
    assert response.status_code == 200
    assert response.headers["content-encoding"] == "gzip"


def test_static_html_is_not_compressed(client):
    response = client.get("/static/index.html", headers={"Accept-Encoding": "gzip"})
    assert response.status_code == 200
    assert "content-encoding" not in response.headers


def test_missing_static_file(client):
    response = client.get("/static/missing.js")
    assert response.status_code == 404
    assert response.json() == {"status": "missing.js not found", "code": 404}


def test_private_requires_basic_auth(client):
    assert client.get("/private").status_code == 401
    assert client.get("/private", auth=("alice", "wrong")).status_code == 401
    response = client.get("/private", auth=("alice", "secret"))
    assert response.status_code == 200
    assert response.json() == {"user": "alice"}


def test_private_not_registered_without_users():
    client = TestClient(create_app())
    assert client.get("/private").status_code == 404


def test_plain_errors():
    client = TestClient(create_app(json_errors=False))
    response = client.get("/.env")
    assert response.status_code == 404
    assert response.text == "Not Found"


def test_main_serves_on_environment_port(monkeypatch):
    served = {}

    def fake_run(app, host, port):
        served.update(app=app, host=host, port=port)

    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)
    monkeypatch.setattr(main_module.Config, "LOG_LEVEL", "INFO")

    main_module.main()

    assert served["port"] == 9090
    assert served["host"] == main_module.Config.HOST


def test_encoded_question_mark_does_not_bypass_blocklist(client):
    response = client.get("/static/x%3Fadmin")
    assert response.status_code == 403
    assert response.json() == {"status": "Forbidden", "code": 403}


def test_create_app_logs_its_setup(caplog):
    caplog.set_level(logging.INFO, logger="httpkit.app")
    create_app(users={"alice": "secret"}, disallowed=["admin"], blocked_code=403)
    messages = [r.getMessage() for r in caplog.records if r.name == "httpkit.app"]
    assert messages == ["Created app: blocking ['admin'] with 403, basic auth on"]
