from __future__ import annotations

from pathlib import Path

import pytest

from catalog_split.app_factory import create_app
from catalog_split.config.ini_config import AppSettings


# -----------------------------
# Helpers
# -----------------------------
def make_settings(tmp_path: Path, **overrides) -> AppSettings:
    values = dict(
        source_file=tmp_path / "products.generated.ts",
        output_dir=tmp_path / "manufacturers",
        array_key="manufacturers",
        strict=True,
        max_source_chars=10_000,
        extension="ts",
        type_name="Manufacturer",
        type_import="../productTypes",
        write_workers=2,
        write_retries=0,
        flask_host="127.0.0.1",
        flask_port=5000,
        flask_debug=False,
    )
    values.update(overrides)
    return AppSettings(**values)


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return make_settings(tmp_path)


@pytest.fixture
def client(settings: AppSettings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app.test_client()


SOURCE = "export const productCatalog = {\n  manufacturers: [\n    { slug: 'byd', name: 'BYD' },\n    { slug: 'keba' }\n  ]\n};\n"


# -----------------------------
# Tests
# -----------------------------
def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_extract_returns_blocks_with_slugs(client):
    resp = client.post("/extract", json={"text": "{ slug: 'a', x: '}' }, { foo: 1 }, { slug: 'b' }"})

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["count"] == 2
    assert data["blocks"] == [
        {"slug": "a", "text": "{ slug: 'a', x: '}' }"},
        {"slug": "b", "text": "{ slug: 'b' }"},
    ]


def test_extract_requires_text(client):
    assert client.post("/extract", json={}).status_code == 400
    assert client.post("/extract", json={"text": 42}).status_code == 400
    assert client.post("/extract", json=["x"]).status_code == 400
    assert client.post("/extract", json="{ slug: 'a' }").status_code == 400


@pytest.mark.parametrize("strict", ["false", 0, None, "yes"])
def test_extract_strict_must_be_boolean(client, strict):
    resp = client.post("/extract", json={"text": "{ slug: 'a' }", "strict": strict})
    assert resp.status_code == 400


def test_extract_malformed_returns_offset(client):
    resp = client.post("/extract", json={"text": "{ slug: 'a' }, { slug: 'b'"})

    assert resp.status_code == 422
    assert resp.get_json()["offset"] == 15


def test_extract_lenient(client):
    resp = client.post("/extract", json={"text": "{ slug: 'a' }, { slug: 'b'", "strict": False})

    assert resp.status_code == 200
    assert resp.get_json()["count"] == 1


def test_extract_too_large(client):
    resp = client.post("/extract", json={"text": "x" * 10_001})
    assert resp.status_code == 413


def test_split_configured_source_then_list_and_download(client, settings: AppSettings):
    settings.source_file.write_text(SOURCE, encoding="utf-8")

    resp = client.post("/split")

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "ok"
    assert [w["file"] for w in data["written"]] == ["byd.ts", "keba.ts"]

    assert client.get("/modules").get_json() == {"modules": ["byd.ts", "keba.ts"]}

    dl = client.get("/modules/byd.ts")
    assert dl.status_code == 200
    assert b"export const byd: Manufacturer = { slug: 'byd', name: 'BYD' };" in dl.data
    dl.close()


def test_split_text_payload(client):
    resp = client.post("/split", json={"text": "manufacturers: [ { slug: bad } ]"})

    assert resp.status_code == 500
    data = resp.get_json()
    assert data["status"] == "failed"
    assert data["failures"][0]["position"] == 1


def test_split_rejects_non_object_json(client):
    assert client.post("/split", json=["x"]).status_code == 400
    assert client.post("/split", json=7).status_code == 400


def test_split_missing_source_is_404(client):
    resp = client.post("/split")
    assert resp.status_code == 404


def test_split_without_array_is_404(client):
    resp = client.post("/split", json={"text": "export default {};"})
    assert resp.status_code == 404


def test_split_malformed_is_422(client):
    resp = client.post("/split", json={"text": "manufacturers: [ { slug: 'a' "})
    assert resp.status_code == 422


def test_download_rejects_unknown_and_traversal(client):
    assert client.get("/modules/missing.ts").status_code == 404
    assert client.get("/modules/..%2Fsecret.ts").status_code == 404
