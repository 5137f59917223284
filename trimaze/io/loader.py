"""
Plain-text maze files.

The format is a stream of whitespace-separated integers: the number of rows,
the number of columns, then one wall mask per cell in row-major order.

    2 3
    1 0 4
    2 7 0
"""
import logging
from typing import List

from trimaze.core.errors import LoadError
from trimaze.core.grid import TriGrid

logger = logging.getLogger(__name__)


def parse_grid(text: str, source: str = "<string>") -> TriGrid:
    tokens = text.split()
    if len(tokens) < 2:
        raise LoadError(f"{source}: missing grid dimensions")

    try:
        values: List[int] = [int(tok) for tok in tokens]
    except ValueError as e:
        raise LoadError(f"{source}: {e}") from e

    rows, cols = values[0], values[1]
    if rows <= 0 or cols <= 0:
        raise LoadError(f"{source}: invalid dimensions {rows}x{cols}")

    cells = values[2:]
    if len(cells) != rows * cols:
        raise LoadError(f"{source}: expected {rows * cols} cells for {rows}x{cols}, got {len(cells)}")

    for i, v in enumerate(cells):
        if not 0 <= v <= 255:
            raise LoadError(f"{source}: cell {i} value {v} does not fit a wall mask")

    logger.debug("Parsed %dx%d grid from %s", rows, cols, source)
    return TriGrid(rows, cols, cells)


def load_grid(filepath: str) -> TriGrid:
    try:
        with open(filepath, "r") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Cannot read {filepath}: {e}") from e
    return parse_grid(text, source=filepath)


def dump_grid(grid: TriGrid) -> str:
    lines = [f"{grid.rows} {grid.cols}"]
    data = grid.to_bytes()
    for r in range(grid.rows):
        start = r * grid.cols
        lines.append(" ".join(str(v) for v in data[start:start + grid.cols]))
    return "\n".join(lines) + "\n"


def save_grid(grid: TriGrid, filepath: str):
    with open(filepath, "w") as f:
        f.write(dump_grid(grid))
