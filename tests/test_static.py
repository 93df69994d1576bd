"""
Tests for the index page and static asset routes.
"""

from unittest.mock import Mock

import pytest


def test_index_is_served(client, static_dir):
    rv = client.get("/")

    assert rv.status_code == 200
    assert rv.get_data(as_text=True) == (static_dir / "index.html").read_text()
    assert rv.mimetype == "text/html"


@pytest.mark.parametrize(
    "path, content_type",
    [
        ("style.css", "text/css; charset=utf-8"),
        ("app.js", "application/javascript; charset=utf-8"),
        ("page.html", "text/html; charset=utf-8"),
    ],
)
def test_content_type_by_extension(client, path, content_type):
    rv = client.get(f"/static/{path}")

    assert rv.status_code == 200
    assert rv.headers["Content-Type"] == content_type


def test_other_extensions_use_guessed_type(client):
    rv = client.get("/static/logo.png")

    assert rv.status_code == 200
    assert rv.mimetype == "image/png"


def test_nested_file_is_served(client):
    rv = client.get("/static/nested/notes.txt")

    assert rv.status_code == 200
    assert rv.get_data(as_text=True) == "notes"


@pytest.mark.parametrize("path", ["/static/missing.js", "/static/", "/unknown", "/static/nested/"])
def test_not_found(client, path):
    assert client.get(path).status_code == 404


@pytest.mark.parametrize(
    "path",
    ["/static/../../etc/passwd", "/static/nested/../app.js", "/static/a..b.js", "/static/..%2Fsecret"],
)
def test_dot_dot_is_rejected_without_reading(client, monkeypatch, path):
    send = Mock()
    monkeypatch.setattr("scribe_gateway.server.app.send_from_directory", send)

    rv = client.get(path)

    assert rv.status_code == 400
    assert rv.get_json() == {"error": "Invalid path"}
    send.assert_not_called()


def test_packaged_front_end_is_used_by_default():
    from scribe_gateway.config import PACKAGE_STATIC_DIR, GatewayConfig
    from scribe_gateway.server import create_app

    app = create_app(GatewayConfig(inference_url="http://h1", llm_url="http://h2"))
    client = app.test_client()

    assert (PACKAGE_STATIC_DIR / "index.html").is_file()
    assert client.get("/").status_code == 200
    assert client.get("/static/app.js").headers["Content-Type"].startswith("application/javascript")
