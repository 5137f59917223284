from typing import Iterator

from trimaze.core.events import EVT_EXIT, EVT_STEP, EventReader
from trimaze.core.geometry import Position


class EventAdapter:
    """
    Adapts an EventReader stream to look like a walk for the Renderer.
    The reader's header must already have been read.
    """
    def __init__(self, reader: EventReader):
        self.reader = reader
        self.steps = 0
        self.exited = False

    def run(self) -> Iterator[Position]:
        for type_code, (pos, _facing) in self.reader.stream_events():
            if type_code == EVT_STEP:
                self.steps += 1
                yield pos
            elif type_code == EVT_EXIT:
                self.steps += 1
                self.exited = True
                yield pos
                return
