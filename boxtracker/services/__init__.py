from boxtracker.services.box_service import BoxService

__all__ = [
    "BoxService",
]
