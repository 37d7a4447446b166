"""Tests persistance — payload JSON unique par page."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from page_blocks.core.schemas import Block, Tab
from page_blocks.storage import PageBlocksDB, db_get_blocks, db_save_blocks, init_db


@pytest.fixture
def db():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()


def test_get_missing_page(db):
    assert db_get_blocks(db, "nope") is None


def test_round_trip_nested_tree(db):
    blocks = [
        Block(id="ts", type="TS01", order=0, content={"tabs": [
            {"id": "t1", "title": "Un", "children": [{"id": "n", "type": "TX01", "content": {"html": "é"}, "order": 0}]},
        ]}),
    ]
    db_save_blocks(db, "p", blocks)
    assert db_get_blocks(db, "p") == blocks


def test_save_overwrites_single_row(db):
    db_save_blocks(db, "p", [Block(id="a", type="TX01")])
    db_save_blocks(db, "p", [Block(id="b", type="TX01")])
    assert db.query(PageBlocksDB).count() == 1
    assert [b.id for b in db_get_blocks(db, "p")] == ["b"]


def test_legacy_children_stored_as_given(db):
    db_save_blocks(db, "p", [Block(id="c", type="TS02", children=[Tab(id="t", title="T")])])
    assert db_get_blocks(db, "p")[0].children[0].id == "t"


def test_unicode_not_escaped(db):
    row = db_save_blocks(db, "p", [Block(id="a", type="TX01", content={"html": "Écoles"})])
    assert "Écoles" in row.blocks
