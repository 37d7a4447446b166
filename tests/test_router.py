"""
Tests router /page-blocks — render, validate, catalog, edit, chargement / sauvegarde.
La DB est une SQLite en mémoire (StaticPool) injectée à la place de get_db.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from page_blocks.api import app
from page_blocks.storage import get_db, init_db


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def client():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


PAGE = [
    {"id": "b1", "type": "TX01", "content": {"html": "<p>A</p>"}, "order": 0},
    {"id": "b2", "type": "TX01", "content": {"html": "<p>B</p>"}, "order": 1},
]


# ── App ───────────────────────────────────────────────────────────────────────

def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


# ── /render ───────────────────────────────────────────────────────────────────

class TestRender:

    def test_render_html(self, client):
        r = client.post("/page-blocks/render", json={"blocks": PAGE})
        assert r.status_code == 200
        assert "text/html" in r.headers["content-type"]
        assert r.text.index("<p>A</p>") < r.text.index("<p>B</p>")

    def test_render_unknown_type(self, client):
        r = client.post("/page-blocks/render", json={"blocks": [{"id": "x", "type": "UNKNOWN", "content": {"html": "<p>hi</p>"}, "order": 0}]})
        assert r.status_code == 200
        assert "<p>hi</p>" in r.text

    def test_render_with_view_state(self, client):
        qa = {"id": "qa", "type": "QA01", "order": 0, "content": {"items": [
            {"question": "Q1", "answer": {"html": "<p>R1</p>"}},
            {"question": "Q2", "answer": {"html": "<p>R2</p>"}},
        ]}}
        r = client.post("/page-blocks/render", json={"blocks": [qa], "view": {"open_qa": {"qa": 1}}})
        assert "<p>R2</p>" in r.text
        assert "<p>R1</p>" not in r.text


# ── /validate ─────────────────────────────────────────────────────────────────

class TestValidate:

    def test_valid(self, client):
        assert client.post("/page-blocks/validate", json={"blocks": PAGE}).json() == {"valid": True, "errors": []}

    def test_schema_error(self, client):
        data = client.post("/page-blocks/validate", json={"blocks": [{"type": "TX01"}]}).json()
        assert data["valid"] is False
        assert data["errors"]

    def test_invariant_errors(self, client):
        blocks = [dict(PAGE[0]), dict(PAGE[0], order=3)]
        data = client.post("/page-blocks/validate", json={"blocks": blocks}).json()
        assert data["valid"] is False
        assert len(data["errors"]) == 2


# ── /catalog ──────────────────────────────────────────────────────────────────

def test_catalog(client):
    data = client.get("/page-blocks/catalog").json()
    ids = [f["id"] for f in data["families"]]
    assert ids[0] == "text"
    assert len(ids) == 10
    table = next(f for f in data["families"] if f["id"] == "table")
    assert [s["id"] for s in table["subvariants"]] == ["TB01", "TB02"]


# ── /edit ─────────────────────────────────────────────────────────────────────

class TestEdit:

    def test_remove_block(self, client):
        r = client.post("/page-blocks/edit", json={"blocks": PAGE, "action": "remove_block", "params": {"block_id": "b1"}})
        assert r.status_code == 200
        assert r.json()["blocks"] == [{"id": "b2", "type": "TX01", "content": {"html": "<p>B</p>"}, "order": 0}]

    def test_add_block(self, client):
        r = client.post("/page-blocks/edit", json={"blocks": PAGE, "action": "add_block",
                                                   "params": {"family_id": "tabs", "subvariant_id": "TS02"}})
        added = r.json()["blocks"][-1]
        assert added["type"] == "TS02"
        assert added["order"] == 2
        assert len(added["content"]["tabs"]) == 2

    def test_stale_id_is_noop(self, client):
        r = client.post("/page-blocks/edit", json={"blocks": PAGE, "action": "update_block",
                                                   "params": {"block_id": "ghost", "patch": {"html": "x"}}})
        assert r.status_code == 200
        assert r.json()["blocks"] == PAGE

    def test_unknown_action(self, client):
        r = client.post("/page-blocks/edit", json={"blocks": PAGE, "action": "explode"})
        assert r.status_code == 400

    def test_bad_direction(self, client):
        r = client.post("/page-blocks/edit", json={"blocks": PAGE, "action": "move_block",
                                                   "params": {"block_id": "b1", "direction": "diagonal"}})
        assert r.status_code == 400

    def test_invalid_payload(self, client):
        r = client.post("/page-blocks/edit", json={"blocks": [{"type": "TX01"}], "action": "remove_block"})
        assert r.status_code == 422


# ── /pages/{key}/blocks ───────────────────────────────────────────────────────

class TestPages:

    def test_missing_page_404(self, client):
        assert client.get("/page-blocks/pages/accueil/blocks").status_code == 404

    def test_save_then_load(self, client):
        r = client.put("/page-blocks/pages/accueil/blocks", json={"blocks": PAGE})
        assert r.status_code == 200
        data = client.get("/page-blocks/pages/accueil/blocks").json()
        assert data["blocks"] == PAGE

    def test_save_replaces_whole_payload(self, client):
        client.put("/page-blocks/pages/accueil/blocks", json={"blocks": PAGE})
        client.put("/page-blocks/pages/accueil/blocks", json={"blocks": PAGE[1:]})
        data = client.get("/page-blocks/pages/accueil/blocks").json()
        assert [b["id"] for b in data["blocks"]] == ["b2"]
