"""HTTP tests for the dashboard API"""

import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from ruleboard.api.deps import get_chat_relay, get_data_dir, get_manifest_path, get_session_factory
from ruleboard.chat.relay import ChatRelay
from ruleboard.db.models import Base, ChatLog
from ruleboard.db.session import make_engine
from ruleboard.main import app


class FakeStream:
    def __init__(self, status_code=200, chunks=()):
        self.status_code = status_code
        self.ok = status_code < 400
        self.chunks = list(chunks)

    def iter_content(self, chunk_size=None):
        yield from self.chunks

    def close(self):
        pass


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'chat.db'}")
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def client(tmp_path, session_factory):
    data_dir = tmp_path / "data"
    manifest = tmp_path / "pyproject.toml"
    manifest.write_text('[project]\nname = "x"\ndependencies = ["fastapi", "requests"]\n', encoding="utf-8")

    app.dependency_overrides[get_data_dir] = lambda: data_dir
    app.dependency_overrides[get_manifest_path] = lambda: manifest
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_chat_relay] = lambda: ChatRelay("http://ollama.test", "test-model")
    yield TestClient(app)
    app.dependency_overrides.clear()


GRAPH = {
    "nodes": [
        {
            "id": "zone",
            "kind": "group",
            "position": {"x": 0, "y": 0},
            "size": {"width": 300, "height": 200},
            "style": {"backgroundColor": "rgba(240, 253, 244, 0.5)"},
            "data": {"label": "Zone"},
        },
        {
            "id": "svc",
            "kind": "leaf",
            "position": {"x": 20, "y": 40},
            "parentNode": "zone",
            "extent": "parent",
            "data": {"label": "Scoring", "subLabel": "XGBoost", "type": "service", "details": ["batch"]},
        },
    ],
    "edges": [
        {"id": "e1", "source": "zone", "target": "svc", "kind": "smoothstep", "animated": True, "label": "scores"},
    ],
}


# ============================================================
# ARCHITECTURE
# ============================================================

def test_missing_root_is_404_with_empty_graph(client):
    response = client.get("/api/architecture")
    assert response.status_code == 404
    assert response.json() == {"nodes": [], "edges": []}


def test_missing_sub_view_is_empty(client):
    response = client.get("/api/architecture", params={"viewId": "svc-1"})
    assert response.status_code == 200
    assert response.json() == {"nodes": [], "edges": []}


def test_save_then_load_round_trip(client, tmp_path):
    assert client.post("/api/architecture", params={"viewId": "svc-1"}, json=GRAPH).json() == {"success": True}

    response = client.get("/api/architecture", params={"viewId": "svc-1"})
    assert response.status_code == 200
    assert response.json() == GRAPH
    assert (tmp_path / "data" / "architecture_svc-1.json").exists()


def test_edge_without_id_round_trips(client):
    a = {"id": "A", "kind": "leaf", "position": {"x": 0, "y": 0}, "data": {"label": "A"}}
    b = {"id": "B", "kind": "leaf", "position": {"x": 200, "y": 0}, "data": {"label": "B"}}
    posted = {"nodes": [a, b], "edges": [{"source": "A", "target": "B"}]}

    response = client.post("/api/architecture", params={"viewId": "root"}, json=posted)
    assert response.status_code == 200

    loaded = client.get("/api/architecture", params={"viewId": "root"}).json()
    assert loaded["nodes"] == [a, b]
    assert len(loaded["edges"]) == 1
    edge = loaded["edges"][0]
    assert (edge["source"], edge["target"]) == ("A", "B")
    assert edge["id"]

    client.post("/api/architecture", json=loaded)
    assert client.get("/api/architecture").json() == loaded


def test_put_is_an_alias_for_post(client):
    assert client.put("/api/architecture", json=GRAPH).status_code == 200
    assert client.get("/api/architecture").json() == GRAPH


def test_transient_fields_are_not_persisted(client, tmp_path):
    graph = json.loads(json.dumps(GRAPH))
    graph["nodes"][1]["data"]["isEditMode"] = True

    client.post("/api/architecture", json=graph)

    stored = json.loads((tmp_path / "data" / "architecture.json").read_text(encoding="utf-8"))
    assert "isEditMode" not in stored["nodes"][1]["data"]


def test_view_ids_are_sanitized(client, tmp_path):
    client.post("/api/architecture", params={"viewId": "../../evil"}, json=GRAPH)

    assert (tmp_path / "data" / "architecture_evil.json").exists()
    assert client.get("/api/architecture", params={"viewId": "evil"}).json() == GRAPH


def test_punctuation_only_view_id_leaves_root_alone(client):
    client.post("/api/architecture", json=GRAPH)

    assert client.post("/api/architecture", params={"viewId": "!!!"}, json={"nodes": [], "edges": []}).status_code == 200

    assert client.get("/api/architecture").json() == GRAPH


def test_invalid_graph_is_rejected(client):
    response = client.post("/api/architecture", json=[1, 2, 3])
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid graph document"}

    response = client.post("/api/architecture", json={"nodes": [{"label": "no id"}]})
    assert response.status_code == 400


def test_unreadable_view_is_500(client, tmp_path):
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "architecture.json").write_text("{oops", encoding="utf-8")

    response = client.get("/api/architecture")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to read data"}


def test_list_views(client):
    client.post("/api/architecture", json=GRAPH)
    client.post("/api/architecture", params={"viewId": "eaip"}, json=GRAPH)

    assert client.get("/api/architecture/views").json() == {"views": ["root", "eaip"]}


# ============================================================
# RULES
# ============================================================

def test_rules_seeded_on_first_read(client, tmp_path):
    rules = client.get("/api/rules").json()
    assert len(rules) == 10
    assert (tmp_path / "data" / "rules.json").exists()


def test_rules_overwrite(client):
    rules = client.get("/api/rules").json()[:2]
    assert client.post("/api/rules", json=rules).json() == {"success": True}
    assert client.get("/api/rules").json() == rules


def test_rules_overwrite_rejects_records_without_id(client):
    response = client.post("/api/rules", json=[{"title": "no id"}])
    assert response.status_code == 400


def test_rules_search_and_stats(client):
    found = client.get("/api/rules/search", params={"section": "Trade", "type": "AI-RAG"}).json()
    assert [r["id"] for r in found] == ["TR-002"]

    stats = client.get("/api/rules/stats").json()
    assert stats["total"] == 10
    assert stats["sectionCounts"]["Trade"]["aiRag"] == 1


def test_get_one_rule_with_risk_level(client):
    rule = client.get("/api/rules/RE-002").json()
    assert rule["id"] == "RE-002"
    assert rule["riskLevel"] == "low"

    assert client.get("/api/rules/ZZ-999").status_code == 404


def test_search_and_stats_carry_risk_levels(client):
    found = client.get("/api/rules/search", params={"search": "GE-001"}).json()
    assert [(r["id"], r["riskLevel"]) for r in found] == [("GE-001", "high")]

    stats = client.get("/api/rules/stats").json()
    assert stats["riskCounts"] == {"high": 4, "medium": 5, "low": 1}


def test_search_tolerates_null_text_fields(client):
    client.post("/api/rules", json=[
        {"id": "GE-100", "title": None, "description": None, "indicators": [None, "cash"], "section": "General Banking"},
    ])

    response = client.get("/api/rules/search", params={"search": "cash"})
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == ["GE-100"]
    assert response.json()[0]["title"] == ""


def test_update_one_rule(client):
    rule = client.get("/api/rules").json()[0]
    rule["risk"] = "Low"

    assert client.put(f"/api/rules/{rule['id']}", json=rule).status_code == 200
    assert client.get("/api/rules").json()[0]["risk"] == "Low"


def test_update_unknown_rule(client):
    response = client.put("/api/rules/ZZ-999", json={"id": "ZZ-999"})
    assert response.status_code == 404


# ============================================================
# TIMELINE
# ============================================================

def test_timeline_seed_and_move(client):
    phases = client.get("/api/timeline").json()
    assert [p["id"] for p in phases][:2] == ["phase-1", "phase-2"]

    moved = client.post("/api/timeline/phase-2/move", params={"index": 0}).json()
    assert [p["id"] for p in moved][:2] == ["phase-2", "phase-1"]
    assert client.get("/api/timeline").json() == moved


def test_timeline_move_unknown_phase(client):
    assert client.post("/api/timeline/nope/move", params={"index": 0}).status_code == 404


def test_timeline_overwrite(client):
    phases = client.get("/api/timeline").json()[:1]
    assert client.post("/api/timeline", json=phases).status_code == 200
    assert client.get("/api/timeline").json() == phases


# ============================================================
# CHAT
# ============================================================

def _chat_body(client):
    rule = client.get("/api/rules").json()[0]
    return {"messages": [{"role": "user", "content": "How would we detect this?"}], "context": rule}


def test_chat_streams_upstream_body(client, monkeypatch, session_factory):
    client.post("/api/architecture", json=GRAPH)
    sent = {}

    def fake_post(url, **kwargs):
        sent["url"] = url
        sent.update(kwargs)
        return FakeStream(chunks=[b'{"message":{"content":"Use "}}\n', b'{"done":true}\n'])

    monkeypatch.setattr("ruleboard.chat.relay.requests.post", fake_post)

    body = _chat_body(client)
    response = client.post("/api/chat", json=body)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.headers["cache-control"] == "no-cache"
    assert response.content == b'{"message":{"content":"Use "}}\n{"done":true}\n'

    system = sent["json"]["messages"][0]
    assert sent["url"] == "http://ollama.test/api/chat"
    assert sent["stream"] is True
    assert sent["json"]["model"] == "test-model"
    assert system["role"] == "system"
    assert f"ID: {body['context']['id']}" in system["content"]
    assert "Scoring (service) - XGBoost [batch]" in system["content"]
    assert "Libraries: fastapi, requests" in system["content"]
    assert sent["json"]["messages"][1:] == body["messages"]

    with session_factory() as session:
        log = session.query(ChatLog).one()
        assert log.upstream_status == "streaming"
        assert log.rule_id == body["context"]["id"]


def test_chat_without_saved_architecture(client, monkeypatch):
    sent = {}

    def fake_post(url, **kwargs):
        sent.update(kwargs)
        return FakeStream(chunks=[b"{}\n"])

    monkeypatch.setattr("ruleboard.chat.relay.requests.post", fake_post)

    body = _chat_body(client)
    body["model"] = "mistral"
    client.post("/api/chat", json=body)

    assert sent["json"]["model"] == "mistral"
    assert "No architecture defined." in sent["json"]["messages"][0]["content"]


def test_chat_upstream_unavailable(client, monkeypatch, session_factory):
    monkeypatch.setattr("ruleboard.chat.relay.requests.post", lambda url, **kwargs: FakeStream(status_code=404))

    response = client.post("/api/chat", json=_chat_body(client))

    assert response.status_code == 503
    assert "Ollama service not available" in response.json()["error"]
    with session_factory() as session:
        assert session.query(ChatLog).one().upstream_status == "unavailable"


def test_ollama_status(client, monkeypatch):
    monkeypatch.setattr(
        "ruleboard.api.routes.check_model_status",
        lambda base_url: {"status": "ok", "model": "llama3:latest"},
    )
    response = client.get("/api/ollama-status")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "model": "llama3:latest"}

    monkeypatch.setattr(
        "ruleboard.api.routes.check_model_status",
        lambda base_url: {"status": "error", "message": "Connection failed"},
    )
    response = client.get("/api/ollama-status")
    assert response.status_code == 503
    assert response.json() == {"status": "error", "message": "Connection failed"}
