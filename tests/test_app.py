"""App wiring: health check and CORS."""
from main import cors_options
from vidtube.core.config import Settings


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_default_cors_origins_are_explicit():
    default = Settings.model_fields["CORS_ORIGINS"].default

    assert "*" not in default
    assert cors_options(default)["allow_credentials"] is True


def test_wildcard_origin_disables_credentials():
    opts = cors_options("*")

    assert opts["allow_origins"] == ["*"]
    assert opts["allow_credentials"] is False


def test_origin_list_is_split_and_trimmed():
    opts = cors_options(" http://a.test , ,http://b.test")

    assert opts["allow_origins"] == ["http://a.test", "http://b.test"]
    assert opts["allow_credentials"] is True


def test_preflight_from_configured_origin(client):
    resp = client.options(
        "/api/v1/videos",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET"},
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_preflight_from_unknown_origin_is_refused(client):
    resp = client.options(
        "/api/v1/videos",
        headers={"Origin": "http://evil.test", "Access-Control-Request-Method": "GET"},
    )

    assert resp.status_code == 400
    assert "access-control-allow-origin" not in resp.headers
