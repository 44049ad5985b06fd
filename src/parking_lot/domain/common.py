from enum import Enum


class VehicleType(str, Enum):
    CAR = "Car"
    BIKE = "Bike"
    EV = "EV"
    HANDICAP = "Handicap"
    HANDICAP_ACCESSIBLE = "Handicap Accessible"


class SlotType(str, Enum):
    REGULAR = "Regular"
    COMPACT = "Compact"
    BIKE = "Bike"
    EV = "EV"
    HANDICAP = "Handicap"
    HANDICAP_ACCESSIBLE = "Handicap Accessible"


class SlotStatus(str, Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"


class SessionStatus(str, Enum):
    ACTIVE = "Active"
    COMPLETED = "Completed"


class BillingType(str, Enum):
    HOURLY = "Hourly"
    DAY_PASS = "Day Pass"
