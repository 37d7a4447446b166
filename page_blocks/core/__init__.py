from .schemas import Block, Tab, parse_blocks, dump_blocks
from .ids import new_block_id, new_tab_id
from . import tree

__all__ = ["Block", "Tab", "parse_blocks", "dump_blocks", "new_block_id", "new_tab_id", "tree"]
