"""Tests schémas — Block / Tab, format wire, immutabilité."""
import pytest
from pydantic import ValidationError

from page_blocks.core.schemas import Block, Tab, dump_blocks, parse_blocks


def test_block_defaults():
    b = Block(id="b", type="TX01")
    assert b.content == {}
    assert b.order == 0
    assert b.children is None


def test_block_is_frozen():
    b = Block(id="b", type="TX01")
    with pytest.raises(ValidationError):
        b.order = 3


def test_block_requires_id():
    with pytest.raises(ValidationError):
        Block(id="", type="TX01")


def test_negative_order_rejected():
    with pytest.raises(ValidationError):
        Block(id="b", type="TX01", order=-1)


def test_null_content_is_empty():
    assert Block(id="b", type="TX01", content=None).content == {}


def test_empty_children_read_as_absent():
    assert Block(id="b", type="TX01", children=[]).children is None


def test_dump_omits_absent_children():
    data = dump_blocks([Block(id="b", type="TX01", content={"html": "x"}, order=0)])
    assert data == [{"id": "b", "type": "TX01", "content": {"html": "x"}, "order": 0}]


def test_dump_keeps_legacy_children():
    b = Block(id="c", type="TS01", children=[Tab(id="t", title="T")])
    assert b.model_dump()["children"] == [{"id": "t", "title": "T", "children": []}]


def test_parse_blocks_from_wire():
    blocks = parse_blocks([{"id": "a", "type": "QA01", "content": {"items": []}, "order": 0, "children": []}])
    assert blocks[0].type == "QA01"
    assert blocks[0].children is None


def test_tab_defaults():
    t = Tab(id="t", title=None, children=None)
    assert t.title == ""
    assert t.children == []
