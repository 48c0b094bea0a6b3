from fastapi.testclient import TestClient

from gamestore.domain.models.product import Platform, Product
from gamestore.infrastructure.repositories.product_repository import SQLAlchemyProductRepository


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_request_id_header_is_returned(client):
    resp = client.get("/", headers={"X-Request-ID": "4d7f0a1c5b2e4f3a9c8d7e6f5a4b3c2d"})
    assert resp.headers["x-request-id"] == "4d7f0a1c5b2e4f3a9c8d7e6f5a4b3c2d"


def test_platforms_seeded_once(client, app, settings):
    db = app.state.session_factory()
    try:
        names = [p.name for p in db.query(Platform).order_by(Platform.id)]
        assert names == settings.SEED_PLATFORMS
        assert SQLAlchemyProductRepository(db, Product).seed_platforms(["Dreamcast"]) == 0
    finally:
        db.close()


def test_validation_errors_are_bad_requests(client):
    resp = client.get("/api/products/not-a-number")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "BadRequestException"


def test_cors_allows_configured_origin(client, settings):
    origin = settings.CORS_ORIGINS[0]
    resp = client.get("/api/products", headers={"Origin": origin})
    assert resp.headers["access-control-allow-origin"] == origin


def test_unexpected_error_keeps_cors_headers(app, settings):
    @app.get("/broken")
    def broken():
        raise RuntimeError("database password is hunter2")

    origin = settings.CORS_ORIGINS[0]
    with TestClient(app) as client:
        resp = client.get("/broken", headers={"Origin": origin})

    assert resp.status_code == 500
    assert resp.headers["access-control-allow-origin"] == origin
    assert resp.json()["error"]["code"] == "InternalServerError"
    assert "hunter2" not in resp.text
