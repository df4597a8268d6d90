from enum import Enum, auto

class State(Enum):
    IDLE = auto()
    BUSY = auto()
