class MazeError(Exception):
    """Base class for every error raised by trimaze."""


class LoadError(MazeError, ValueError):
    """Grid source is unreadable or does not match its declared size."""


class InvalidStart(MazeError, ValueError):
    def __init__(self, row: int, col: int, rows: int, cols: int):
        super().__init__(f"Start ({row}, {col}) is outside the {rows}x{cols} grid")
        self.row = row
        self.col = col


class OutOfRange(MazeError, IndexError):
    def __init__(self, row: int, col: int):
        super().__init__(f"Coordinate ({row}, {col}) out of bounds")
        self.row = row
        self.col = col


class StepLimitExceeded(MazeError, RuntimeError):
    def __init__(self, max_steps: int):
        super().__init__(f"Walker did not reach the boundary within {max_steps} steps")
        self.max_steps = max_steps
