from enum import Enum


class Method(Enum):
    START_THRESHOLD = "ST"
    STOP_THRESHOLD = "SP"
    INHIBIT_CHARGE = "IC"
    FORCE_DISCHARGE = "FD"
    PEAK_SHIFT_STATE = "PS"


class Mode(Enum):
    GET = "get"
    SET = "set"


class BatterySelector(Enum):
    ANY = 0
    MAIN = 1
    SECONDARY = 2
