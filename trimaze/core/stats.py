from trimaze.core.grid import TriGrid


def count_walls(mask: int) -> int:
    c = 0
    if mask & TriGrid.LEFT: c += 1
    if mask & TriGrid.RIGHT: c += 1
    if mask & TriGrid.BASE: c += 1
    return c


def calculate_stats(grid: TriGrid):
    """
    Summarises how walled the maze is.
    Purely informational, nothing here decides whether a maze is valid.
    """
    open_cells = 0   # 0 walls
    corridors = 0    # 1 wall, two ways through
    dead_ends = 0    # 2 walls, one way in or out
    sealed = 0       # 3 walls, a walker starting here pivots forever

    for row in grid.masks():
        for mask in row:
            walls = count_walls(mask)
            if walls == 0: open_cells += 1
            elif walls == 1: corridors += 1
            elif walls == 2: dead_ends += 1
            else: sealed += 1

    exits = sum(1 for r, c, edge in grid.boundary_edges() if not grid.has_wall(r, c, edge))

    total = len(grid)
    return {
        "open": open_cells,
        "corridors": corridors,
        "dead_ends": dead_ends,
        "sealed": sealed,
        "exits": exits,
        "sealed_percent": (sealed / total) * 100 if total > 0 else 0
    }
