import jwt
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from atolyehub.app import create_app, main
from atolyehub.models import Base, Category, Teacher

SIGNING_KEY = "secret"
EMAIL = "teacher@example.com"


@pytest.fixture
def client():
    engine = create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    make = sessionmaker(bind=engine, expire_on_commit=False)
    with make() as session:
        session.add_all([Teacher(email=EMAIL, name="Ada"), Category(name="Bilim")])
        session.commit()
    yield create_app(make, SIGNING_KEY).test_client()
    engine.dispose()


def _auth(key=SIGNING_KEY):
    encoded = jwt.encode({"sub": EMAIL}, key, algorithm="HS256")
    return {"Authorization": f"Bearer {encoded}"}


def test_ping(client):
    resp = client.get("/api/ping")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "pong"}


def test_keys_keep_declaration_order(client):
    client.post("/api/projects", json={"projeAdi": "Robotik"}, headers=_auth())
    listed = client.get("/api/projects").get_json()
    keys = list(listed[0])
    assert keys[0] == "projectId"
    assert keys[-1] == "category"


def test_responses_are_utf8(client):
    resp = client.get("/api/workshops/999")
    assert resp.status_code == 404
    assert "Atölye bulunamadı".encode() in resp.data


def test_key_is_enforced(client):
    resp = client.post("/api/projects", json={}, headers=_auth("placeholder"))
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Geçersiz veya süresi dolmuş token"


def test_main_rejects_bad_port():
    with pytest.raises(SystemExit):
        main(["--port", "abc"])


def test_main_fails_without_database(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DB_HOST", "127.0.0.1")
    monkeypatch.setenv("DB_PORT", "1")
    assert main([]) == 1