import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from cryptcrawl.dungeon.map import Map  # noqa: E402
from cryptcrawl.dungeon.tiles import TileType  # noqa: E402


@pytest.fixture
def open_map():
    """10x8 map: walled border, open floor inside, blocked flags populated."""
    m = Map(10, 8, default=TileType.FLOOR)
    for x in range(m.width):
        m.set_tile(x, 0, TileType.WALL)
        m.set_tile(x, m.height - 1, TileType.WALL)
    for y in range(m.height):
        m.set_tile(0, y, TileType.WALL)
        m.set_tile(m.width - 1, y, TileType.WALL)
    m.populate_blocked()
    return m
