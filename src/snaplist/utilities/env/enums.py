from enum import StrEnum


class ExhaustionSignal(StrEnum):
    NONE = "none"
    STATE = "state"
