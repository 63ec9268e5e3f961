from enum import Enum


class Role(str, Enum):
    ARTIST = "artist"
    CLIENT = "client"
    ADMIN = "admin"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    UNAVAILABLE = "unavailable"


class PriceType(str, Enum):
    FIXED = "fixed"
    HOURLY = "hourly"
    NEGOTIABLE = "negotiable"
