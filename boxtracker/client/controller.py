"""
Board controller: runs the network side of every user action.

State changes go through `reduce`; this class only decides which actions to
dispatch and when to talk to the API.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Protocol

import requests

from boxtracker.client.api import BoxesApiClient, BoxesApiError, ImageUploader
from boxtracker.client.state import (
    Action,
    AddFieldChanged,
    AddFormReset,
    AddImageSelected,
    BoardState,
    BoxesLoaded,
    BoxesLoadFailed,
    EditFieldChanged,
    EditFinished,
    EditImageSelected,
    Editing,
    EditStarted,
    LoadingChanged,
    PendingImage,
    SortColumn,
    SortRequested,
    Tab,
    TabSelected,
    reduce,
)
from boxtracker.config import Settings, get_settings
from boxtracker.infra.logging_config import get_logger

logger = get_logger("client.controller")

ADD_REQUIRED = "Please fill in box number, room, and contents"
EDIT_REQUIRED = "Please fill in room and contents"
NUMBER_INVALID = "Box number must be a whole number"
CONFIRM_DELETE = "Are you sure you want to delete this box?"
ADD_FAILED = "Failed to add box"
UPDATE_FAILED = "Failed to update box"
DELETE_FAILED = "Failed to delete box"
TOGGLE_FAILED = "Failed to update box visibility"


class Notifier(Protocol):
    """Blocking prompts shown to the user."""

    def alert(self, message: str) -> None: ...

    def confirm(self, message: str) -> bool: ...


class ConsoleNotifier:
    """Notifier for a terminal session."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self._input = input_fn
        self._output = output_fn

    def alert(self, message: str) -> None:
        self._output(message)

    def confirm(self, message: str) -> bool:
        answer = self._input(f"{message} [y/N] ")
        return answer.strip().lower() in ("y", "yes")


class BoxBoardController:
    def __init__(
        self,
        api: BoxesApiClient,
        notifier: Notifier,
        uploader: Optional[ImageUploader] = None,
        state: Optional[BoardState] = None,
    ) -> None:
        self.api = api
        self.notifier = notifier
        self.uploader = uploader
        self.state = state or BoardState()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
    ) -> "BoxBoardController":
        settings = settings or get_settings()
        session = requests.Session()
        api = BoxesApiClient(
            settings.api_base_url,
            session=session,
            timeout=settings.http_timeout_seconds,
        )
        uploader = ImageUploader(
            settings.resolved_upload_url,
            session=session,
            timeout=settings.http_timeout_seconds,
        )
        return cls(api, notifier or ConsoleNotifier(), uploader=uploader)

    def dispatch(self, action: Action) -> BoardState:
        self.state = reduce(self.state, action)
        return self.state

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self.dispatch(LoadingChanged(True))
        try:
            yield
        finally:
            self.dispatch(LoadingChanged(False))

    def _upload(self, image: Optional[PendingImage]) -> Optional[str]:
        if image is None:
            return None
        if self.uploader is None:
            logger.warning("No upload endpoint configured; dropping %s", image.filename)
            return None
        return self.uploader.upload(image)

    # Loading and view selection

    def mount(self) -> BoardState:
        return self.refresh()

    def refresh(self) -> BoardState:
        """Fetch every box, then filter and sort for the active tab."""
        try:
            boxes = self.api.list_boxes(include_hidden=True)
        except BoxesApiError as e:
            logger.error("Error fetching boxes: %s", e)
            return self.dispatch(BoxesLoadFailed())
        return self.dispatch(BoxesLoaded(boxes))

    def select_tab(self, tab: Tab) -> BoardState:
        if tab == self.state.tab:
            return self.state
        self.dispatch(TabSelected(Tab(tab)))
        return self.refresh()

    def sort_by(self, column: SortColumn) -> BoardState:
        self.dispatch(SortRequested(SortColumn(column)))
        return self.refresh()

    # Add form

    def set_add_field(self, name: str, value: str) -> BoardState:
        return self.dispatch(AddFieldChanged(name, value))

    def select_add_image(self, image: Optional[PendingImage]) -> BoardState:
        return self.dispatch(AddImageSelected(image))

    def add_box(self) -> bool:
        if self.state.loading:
            return False
        form = self.state.add_form
        if not form.number.strip() or not form.room or not form.contents:
            self.notifier.alert(ADD_REQUIRED)
            return False
        try:
            number = int(form.number)
        except ValueError:
            self.notifier.alert(NUMBER_INVALID)
            return False

        with self._busy():
            try:
                image_url = self._upload(form.image)
                self.api.create_box(number, form.room, form.contents, image_url)
            except BoxesApiError as e:
                logger.error("Error adding box: %s", e)
                self.notifier.alert(ADD_FAILED)
                return False
            self.dispatch(AddFormReset())
            self.refresh()
        return True

    # Editing

    def start_editing(self, box_id: int) -> bool:
        box = self.state.find_box(box_id)
        if box is None:
            logger.warning("Cannot edit unknown box %s", box_id)
            return False
        self.dispatch(EditStarted(box))
        return True

    def set_edit_field(self, name: str, value: str) -> BoardState:
        return self.dispatch(EditFieldChanged(name, value))

    def select_edit_image(self, image: Optional[PendingImage]) -> BoardState:
        return self.dispatch(EditImageSelected(image))

    def cancel_edit(self) -> BoardState:
        return self.dispatch(EditFinished())

    def save_edit(self) -> bool:
        edit = self.state.edit
        if self.state.loading or not isinstance(edit, Editing):
            return False
        draft = edit.draft
        if not draft.room or not draft.contents:
            self.notifier.alert(EDIT_REQUIRED)
            return False

        with self._busy():
            try:
                image_url = draft.image_url
                if draft.image is not None:
                    image_url = self._upload(draft.image) or draft.image_url
                self.api.update_box(edit.box_id, draft.room, draft.contents, image_url)
            except BoxesApiError as e:
                logger.error("Error updating box %s: %s", edit.box_id, e)
                self.notifier.alert(UPDATE_FAILED)
                return False
            self.dispatch(EditFinished())
            self.refresh()
        return True

    # Immediate actions

    def toggle_hidden(self, box_id: int) -> bool:
        if self.state.loading:
            return False
        box = self.state.find_box(box_id)
        if box is None:
            logger.warning("Cannot toggle unknown box %s", box_id)
            return False

        with self._busy():
            try:
                self.api.set_hidden(box_id, not box.hidden)
            except BoxesApiError as e:
                logger.error("Error toggling box %s visibility: %s", box_id, e)
                self.notifier.alert(TOGGLE_FAILED)
                return False
            self.refresh()
        return True

    def delete_box(self, box_id: int) -> bool:
        if self.state.loading:
            return False
        if not self.notifier.confirm(CONFIRM_DELETE):
            return False

        with self._busy():
            try:
                self.api.delete_box(box_id)
            except BoxesApiError as e:
                logger.error("Error deleting box %s: %s", box_id, e)
                self.notifier.alert(DELETE_FAILED)
                return False
            self.refresh()
        return True
