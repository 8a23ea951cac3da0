from pathlib import Path
import pytest
from sanskrit_search.engine import Engine
from frontend.web import app as flask_app
import frontend.web as webmod

def _seed(tmp: Path) -> str:
    root = tmp / "Archive"; root.mkdir()
    (root / "s.txt").write_text(
        "नारायणेति ब्रूयात्\n"
        "नारायणं नमस्कृत्य <नरं>\n",
        encoding="utf-8",
    )
    return str(root)

@pytest.fixture
def client(tmp_path: Path, monkeypatch):
    eng = Engine()
    eng.build(roots=[_seed(tmp_path)])
    monkeypatch.setattr(webmod, "_engine", eng)
    yield flask_app.test_client()
    eng.shutdown()

@pytest.mark.e2e
def test_search_api_json(client):
    rv = client.get("/api/search", query_string={"q": "नारायण"})
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["term"] == "नारायण" and data["mode"] == "auto"
    assert [r["id"] for r in data["results"]] == ["s.txt:0", "s.txt:1"]
    first = data["results"][0]
    for key in ("id", "metadata", "matches", "count", "searchTerm", "timestamp", "html"):
        assert key in first
    assert data["count"] == sum(r["count"] for r in data["results"])
    assert '<span class="search-highlight" data-type="direct">' in first["html"]

@pytest.mark.e2e
def test_search_api_pratika_mode(client):
    data = client.get("/api/search", query_string={"q": "नारायण", "mode": "pratika"}).get_json()
    types = {m["type"] for m in data["results"][0]["matches"]}
    assert "pratika-grahana" in types

@pytest.mark.e2e
def test_search_api_escapes_document_text(client):
    data = client.get("/api/search", query_string={"q": "नारायणं"}).get_json()
    assert [r["id"] for r in data["results"]] == ["s.txt:1"]
    assert "&lt;नरं&gt;" in data["results"][0]["html"]

@pytest.mark.e2e
def test_search_api_empty_and_bad_mode(client):
    data = client.get("/api/search?q=").get_json()
    assert data["count"] == 0 and data["results"] == []
    rv = client.get("/api/search", query_string={"q": "राम", "mode": "fuzzy"})
    assert rv.status_code == 400

@pytest.mark.e2e
def test_pratika_api(client):
    data = client.get("/api/pratika", query_string={"text": "जगदिति"}).get_json()
    assert data["isPratika"] is True
    assert data["stem"] == "जगत्"
    assert data["ruleId"] == "diti"
    assert data["searchableForms"] == ["जगत्", "जगद्"]
    data = client.get("/api/pratika", query_string={"text": "भूति"}).get_json()
    assert data["isPratika"] is False and "searchableForms" not in data

@pytest.mark.e2e
def test_variants_api(client):
    data = client.get("/api/variants", query_string={"q": "नारायणं"}).get_json()
    assert data["phonetic"] == ["नारायणं", "नारायणम्"]
    assert data["sandhi"][0] == {"text": "नारायणं", "ruleId": "original"}
    data = client.get("/api/variants", query_string={"q": "राम"}).get_json()
    assert data["quotation"] == [{"text": "रामेति", "ruleId": "stem->ेति"}]

@pytest.mark.e2e
def test_health_and_home(client):
    rv = client.get("/health")
    assert rv.status_code == 200
    assert rv.get_json() == {"ok": True, "documents": 2}
    rv = client.get("/")
    assert rv.status_code == 200
    assert "Sanskrit Search" in rv.get_data(as_text=True)

@pytest.mark.e2e
def test_uninitialized_engine_is_503(monkeypatch):
    monkeypatch.setattr(webmod, "_engine", None)
    client = flask_app.test_client()
    assert client.get("/api/search", query_string={"q": "राम"}).status_code == 503
    assert client.get("/api/pratika", query_string={"text": "रामेति"}).status_code == 503
    rv = client.get("/health")
    assert rv.status_code == 503
    assert rv.get_json()["ok"] is False
