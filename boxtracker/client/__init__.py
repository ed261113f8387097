"""Board client: view-model, reducer and controller."""

from boxtracker.client.api import BoxesApiClient, BoxesApiError, ImageUploader
from boxtracker.client.controller import BoxBoardController, ConsoleNotifier, Notifier
from boxtracker.client.state import BoardState, PendingImage, SortColumn, SortDirection, Tab

__all__ = [
    "BoardState",
    "BoxBoardController",
    "BoxesApiClient",
    "BoxesApiError",
    "ConsoleNotifier",
    "ImageUploader",
    "Notifier",
    "PendingImage",
    "SortColumn",
    "SortDirection",
    "Tab",
]
