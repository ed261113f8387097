from boxtracker.models.box import Box

__all__ = [
    "Box",
]
