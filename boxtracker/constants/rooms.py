"""Room names offered when recording a box."""

from enum import StrEnum


class Room(StrEnum):
    KITCHEN = "Kitchen"
    DINING_ROOM = "Dining Room"
    LIVING_ROOM = "Living Room"
    BEDROOM = "Bedroom"
    BATHROOM = "Bathroom"
    OFFICE = "Office"
    GARAGE = "Garage"
    BASEMENT = "Basement"
    ATTIC = "Attic"
    OTHER = "Other"


ROOM_NAMES: list[str] = [room.value for room in Room]
