import os
import sys
import tempfile

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("PAGE_BLOCKS_DB_PATH", os.path.join(tempfile.mkdtemp(), "page_blocks.db"))

import pytest

from page_blocks.core.schemas import Block


@pytest.fixture
def two_texts():
    return [
        Block(id="b1", type="TX01", content={"html": "<p>A</p>"}, order=0),
        Block(id="b2", type="TX01", content={"html": "<p>B</p>"}, order=1),
    ]


@pytest.fixture
def tabs_page():
    """Un texte + un conteneur TS01 à deux onglets, le premier contenant un texte."""
    return [
        Block(id="intro", type="TX01", content={"html": "<p>Intro</p>"}, order=0),
        Block(id="ts", type="TS01", order=1, content={"tabs": [
            {"id": "t1", "title": "Premier", "children": [
                {"id": "n1", "type": "TX01", "content": {"html": "<p>Dans t1</p>"}, "order": 0},
            ]},
            {"id": "t2", "title": "Second", "children": []},
        ]}),
    ]
