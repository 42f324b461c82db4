import struct
from typing import Iterator, Tuple

# Event Types
EVT_PATH_ADD = 0x01
EVT_PATH_REM = 0x02
EVT_RESET = 0x03
EVT_COMPLETE = 0x04
EVT_PUZZLE = 0x05

MAGIC = b"ZIPLOG"
VERSION = 1


class EventWriter:
    """Binary log of one play session. Attach to a GameSession via event_writer=."""

    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "wb")

    def write_header(self):
        # Header: Magic "ZIPLOG" + Version (1b)
        self.file.write(MAGIC)
        self.file.write(struct.pack(">B", VERSION))

    def log_puzzle(self, difficulty_code: int, mode_code: int, seed: int):
        # Puzzles are never stored, only the seed needed to regenerate them
        self.file.write(struct.pack(">BBBQ", EVT_PUZZLE, difficulty_code, mode_code, seed))

    def log_path_add(self, row: int, col: int):
        # 1 byte type + 1 byte row + 1 byte col; grids never exceed 255 cells a side
        self.file.write(struct.pack(">BBB", EVT_PATH_ADD, row, col))

    def log_path_rem(self, row: int, col: int):
        self.file.write(struct.pack(">BBB", EVT_PATH_REM, row, col))

    def log_reset(self):
        self.file.write(struct.pack(">B", EVT_RESET))

    def log_complete(self, elapsed: float):
        self.file.write(struct.pack(">Bd", EVT_COMPLETE, elapsed))

    def flush(self):
        if self.file:
            self.file.flush()

    def close(self):
        if self.file:
            self.file.close()
            self.file = None


class EventReader:
    def __init__(self, filename: str):
        self.filename = filename
        self.file = open(filename, "rb")

    def read_header(self) -> int:
        magic = self.file.read(len(MAGIC))
        if magic != MAGIC:
            raise ValueError("Invalid session log file")
        data = self.file.read(1)
        if not data:
            raise ValueError("Truncated session log header")
        version = data[0]
        if version != VERSION:
            raise ValueError(f"Unsupported session log version: {version}")
        return version

    def stream_events(self) -> Iterator[Tuple[int, Tuple]]:
        while True:
            type_byte = self.file.read(1)
            if not type_byte:
                break

            type_code = ord(type_byte)

            if type_code in (EVT_PATH_ADD, EVT_PATH_REM):
                data = self._read(2)
                yield (type_code, struct.unpack(">BB", data))

            elif type_code == EVT_RESET:
                yield (type_code, ())

            elif type_code == EVT_COMPLETE:
                data = self._read(8)
                yield (type_code, struct.unpack(">d", data))

            elif type_code == EVT_PUZZLE:
                data = self._read(10)
                yield (type_code, struct.unpack(">BBQ", data))

            else:
                raise ValueError(f"Unknown event type 0x{type_code:02x}")

    def close(self):
        if self.file:
            self.file.close()
            self.file = None

    def _read(self, n: int) -> bytes:
        data = self.file.read(n)
        if len(data) != n:
            raise ValueError("Truncated session log record")
        return data
