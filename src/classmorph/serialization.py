"""
Reading and writing ESTree JSON.

Uses orjson for fast (de)serialisation. Location keys copied over from the
parser output can be stripped so the generated tree only carries structure.
"""

from pathlib import Path
from typing import Any

import orjson

LOCATION_KEYS = frozenset({"start", "end", "range", "loc"})


def load_tree(path: Path) -> Any:
    """Load a JSON tree (a Program node or a list of call arguments)."""
    with open(path, "rb") as f:
        return orjson.loads(f.read())


def loads_tree(data: str | bytes) -> Any:
    return orjson.loads(data)


def dumps_tree(tree: Any, indent: bool = True) -> bytes:
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(tree, option=option)


def save_tree(tree: Any, path: Path, indent: bool = True) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(dumps_tree(tree, indent=indent))
    return path


def strip_locations(tree: Any) -> Any:
    """Copy of ``tree`` without start/end/range/loc keys."""
    if isinstance(tree, dict):
        return {
            key: strip_locations(value)
            for key, value in tree.items()
            if key not in LOCATION_KEYS
        }
    if isinstance(tree, list):
        return [strip_locations(item) for item in tree]
    return tree
