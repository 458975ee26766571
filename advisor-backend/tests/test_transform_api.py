import asyncio
import json

from fastapi.testclient import TestClient

from advisor.crs import messages
from advisor import transform
from advisor.main import app
from catalog import loader
from tests.catalogs import japan_catalog

client = TestClient(app)


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_suggest_two_hop_bundled_catalog():
    payload = {"source_crs": "4301", "target_crs": "EPSG:6668"}
    resp = client.post("/transformations/suggest", json=payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["direct_path"] is None
    rec = data["recommended"]
    assert rec["complexity"] == "moderate"
    assert [s["target"] for s in rec["steps"]] == ["EPSG:4612", "EPSG:6668"]
    assert rec["steps"][0]["accuracy_tier"] == "centimeter"
    assert any("deprecated" in w for w in data["warnings"])


def test_suggest_accepts_camel_case_and_bbox():
    payload = {
        "sourceCrs": "EPSG:4612",
        "targetCrs": "6668",
        "location": {"country": "JP", "boundingBox": {"north": 45, "south": 30, "east": 146, "west": 128}},
    }
    resp = client.post("/transformations/suggest", json=payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["direct_path"]["complexity"] == "simple"
    assert messages.WIDE_AREA_WARNING in data["warnings"]


def test_suggest_same_crs():
    resp = client.post("/transformations/suggest", json={"source_crs": "4326", "target_crs": "EPSG:4326"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["recommended"]["steps"] == []
    assert data["warnings"] == [messages.SAME_CRS]


def test_suggest_not_found_is_404():
    resp = client.post("/transformations/suggest", json={"source_crs": "4283", "target_crs": "6668"})
    assert resp.status_code == 404
    detail = resp.json()["detail"]
    assert detail["code"] == "NOT_FOUND"
    assert "EPSG:4283" in detail["text"] and "EPSG:6668" in detail["text"]


def test_suggest_rejects_malformed_code():
    resp = client.post("/transformations/suggest", json={"source_crs": "WGS84", "target_crs": "6668"})
    assert resp.status_code == 422


def test_suggest_rejects_out_of_range_bbox():
    payload = {
        "source_crs": "4612",
        "target_crs": "6668",
        "location": {"bounding_box": {"north": 95, "south": 30, "east": 140, "west": 130}},
    }
    resp = client.post("/transformations/suggest", json=payload)
    assert resp.status_code == 422


def test_catalog_summary_uses_installed_catalog():
    loader.set_catalog(japan_catalog())
    resp = client.get("/catalog")
    assert resp.status_code == 200
    data = resp.json()
    assert data["version"] == "jp-1"
    assert data["records"] == 6
    assert data["nodes"] == 7
    assert data["deprecated"] == ["EPSG:4301"]


def test_catalog_reload_rebuilds_only_on_version_change(tmp_path, monkeypatch):
    p = tmp_path / "catalog.json"
    body = {
        "version": "r1",
        "transformations": [
            {"id": "a", "from": "EPSG:1", "to": "EPSG:2", "method": "m", "accuracy": "a few cm", "reversible": True}
        ],
    }
    p.write_text(json.dumps(body), encoding="utf-8")
    monkeypatch.setenv("CATALOG_PATH", str(p))

    first = client.post("/catalog/reload")
    assert first.json() == {"version": "r1", "rebuilt": True}
    again = client.post("/catalog/reload")
    assert again.json() == {"version": "r1", "rebuilt": False}

    body["version"] = "r2"
    body["transformations"].append(
        {"id": "b", "from": "EPSG:2", "to": "EPSG:3", "method": "m", "accuracy": "1-2m", "reversible": False}
    )
    p.write_text(json.dumps(body), encoding="utf-8")
    assert client.post("/catalog/reload").json() == {"version": "r2", "rebuilt": True}

    resp = client.post("/transformations/suggest", json={"source_crs": "1", "target_crs": "3"})
    assert resp.status_code == 200
    assert resp.json()["recommended"]["total_accuracy"] == messages.ACCURACY_CUMULATIVE


def test_catalog_reload_failure_is_503(tmp_path, monkeypatch):
    monkeypatch.setenv("CATALOG_PATH", str(tmp_path / "missing.json"))
    resp = client.post("/catalog/reload")
    assert resp.status_code == 503
    assert resp.json()["detail"]["code"] == "DATA_LOAD_ERROR"


def test_suggest_runs_engine_off_event_loop(monkeypatch):
    seen = []
    real = transform.suggest_transformation

    def recording(*args, **kwargs):
        try:
            asyncio.get_running_loop()
            seen.append("loop")
        except RuntimeError:
            seen.append("worker")
        return real(*args, **kwargs)

    monkeypatch.setattr(transform, "suggest_transformation", recording)
    resp = client.post("/transformations/suggest", json={"source_crs": "4612", "target_crs": "6668"})
    assert resp.status_code == 200
    assert seen == ["worker"]
