from unittest.mock import Mock

import pytest

from scribe_gateway.config import GatewayConfig
from scribe_gateway.server import create_app

INDEX_HTML = "<!DOCTYPE html><title>index</title>"


@pytest.fixture
def static_dir(tmp_path):
    root = tmp_path / "static"
    root.mkdir()
    (root / "index.html").write_text(INDEX_HTML)
    (root / "style.css").write_text("body { margin: 0; }")
    (root / "app.js").write_text("console.log('hi');")
    (root / "page.html").write_text("<p>page</p>")
    (root / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "nested").mkdir()
    (root / "nested" / "notes.txt").write_text("notes")
    return root


@pytest.fixture
def config(static_dir):
    return GatewayConfig(
        inference_url="http://h1/",
        llm_url="http://h2/",
        model_name="whisper-large",
        llm_model="llama-3",
        static_dir=static_dir,
    )


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def backend_post(monkeypatch):
    """Replace the outbound requests.post; defaults to a 200 JSON reply."""
    post = Mock(return_value=Mock(status_code=200, content=b'{"text": "hello world"}'))
    monkeypatch.setattr("scribe_gateway.server.backends.requests.post", post)
    return post
