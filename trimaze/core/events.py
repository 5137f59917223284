import struct
from typing import Iterator, Optional, Tuple

from trimaze.core.geometry import Direction, Hand, Position

MAGIC = b"TRIWALK"

# Event Types
EVT_STEP = 0x01
EVT_EXIT = 0x02

NO_FACING = -1

# Positions are stored as signed shorts and the exit can sit one past either side
MAX_DIM = 32767


class EventWriter:
    """
    Records a walk as a compact binary log.
    Pass log_step as the walker's observer.
    """
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")
        self.rows = 0
        self.cols = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def write_header(self, rows: int, cols: int, hand: Hand):
        if rows > MAX_DIM or cols > MAX_DIM:
            raise ValueError(f"Walk logs hold grids up to {MAX_DIM}x{MAX_DIM}, got {rows}x{cols}")
        # Header: Magic "TRIWALK" + Rows (4b) + Cols (4b) + Hand (1b, signed)
        self.rows = rows
        self.cols = cols
        self.file.write(MAGIC)
        self.file.write(struct.pack(">IIb", rows, cols, int(hand)))

    def log_step(self, pos: Position, facing: Optional[Direction] = None):
        row, col = pos
        if 0 <= row < self.rows and 0 <= col < self.cols:
            # 1 byte type + 2b row + 2b col + 1b facing
            # Signed shorts, the exit position can be -1
            code = NO_FACING if facing is None else facing.value
            self.file.write(struct.pack(">Bhhb", EVT_STEP, row, col, code))
        else:
            self.file.write(struct.pack(">Bhh", EVT_EXIT, row, col))

    def close(self):
        if self.file:
            self.file.close()
            self.file = None


class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")
        self.rows = 0
        self.cols = 0
        self.hand = Hand.RIGHT

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def read_header(self) -> Tuple[int, int, Hand]:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid walk log file")
        data = self.file.read(9)
        if len(data) != 9:
            raise ValueError("Truncated walk log header")
        self.rows, self.cols, hand = struct.unpack(">IIb", data)
        self.hand = Hand(hand)
        return self.rows, self.cols, self.hand

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = ord(type_byte)

            if type_code == EVT_STEP:
                data = self.file.read(5)  # 2 shorts + 1 byte
                row, col, code = struct.unpack(">hhb", data)
                facing = None if code == NO_FACING else Direction(code)
                yield (type_code, (Position(row, col), facing))

            elif type_code == EVT_EXIT:
                data = self.file.read(4)
                row, col = struct.unpack(">hh", data)
                yield (type_code, (Position(row, col), None))

            else:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")

    def close(self):
        if self.file:
            self.file.close()
            self.file = None
