import json
import struct
import zlib
from typing import Any, Dict, Tuple

from trimaze.core.errors import LoadError
from trimaze.core.grid import TriGrid


class MazeSerializer:
    MAGIC = b"TMAZ"
    VERSION = 1

    # Flags
    FLAG_COMPRESSED = 1

    @staticmethod
    def save(grid: TriGrid, filepath: str, meta: Dict[str, Any] = None, compress=False):
        """
        Saves the maze to a binary file.
        Format:
        - MAGIC (4 bytes)
        - VERSION (1 byte)
        - FLAGS (1 byte)
        - ROWS (4 bytes)
        - COLS (4 bytes)
        - META_LEN (2 bytes)
        - META_JSON (META_LEN bytes)
        - DATA_LEN (4 bytes)
        - DATA (compressed or raw)
        """
        if meta is None:
            meta = {}

        flags = 0
        if compress:
            flags |= MazeSerializer.FLAG_COMPRESSED

        meta_bytes = json.dumps(meta).encode('utf-8')

        data = grid.to_bytes()
        if compress:
            data = zlib.compress(data)

        with open(filepath, "wb") as f:
            f.write(MazeSerializer.MAGIC)
            f.write(struct.pack("<BB", MazeSerializer.VERSION, flags))
            f.write(struct.pack("<II", grid.rows, grid.cols))
            f.write(struct.pack("<H", len(meta_bytes)))
            f.write(meta_bytes)
            f.write(struct.pack("<I", len(data)))
            f.write(data)

    @staticmethod
    def load(filepath: str) -> Tuple[TriGrid, Dict[str, Any]]:
        try:
            with open(filepath, "rb") as f:
                magic = f.read(4)
                if magic != MazeSerializer.MAGIC:
                    raise LoadError(f"{filepath}: not a trimaze file")

                version, flags = struct.unpack("<BB", f.read(2))
                if version != MazeSerializer.VERSION:
                    raise LoadError(f"{filepath}: unsupported version {version}")

                rows, cols = struct.unpack("<II", f.read(8))
                meta_len = struct.unpack("<H", f.read(2))[0]
                meta = json.loads(f.read(meta_len).decode('utf-8'))

                data_len = struct.unpack("<I", f.read(4))[0]
                data = f.read(data_len)
                if len(data) != data_len:
                    raise LoadError(f"{filepath}: truncated cell data")
        except LoadError:
            raise
        except OSError as e:
            raise LoadError(f"Cannot read {filepath}: {e}") from e
        except (struct.error, ValueError) as e:
            raise LoadError(f"{filepath}: corrupt header ({e})") from e

        if flags & MazeSerializer.FLAG_COMPRESSED:
            try:
                data = zlib.decompress(data)
            except zlib.error as e:
                raise LoadError(f"{filepath}: {e}") from e

        try:
            grid = TriGrid(rows, cols, data)
        except ValueError as e:
            raise LoadError(f"{filepath}: {e}") from e
        return grid, meta
