"""
Board view-model: immutable state plus pure transitions.

`reduce(state, action)` returns a new BoardState and never touches the
network; BoxBoardController owns the side effects.
"""

from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass, field, replace
from enum import StrEnum
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from boxtracker.schemas.box import BoxRead


class Tab(StrEnum):
    PACKED = "packed"
    UNPACKED = "unpacked"


class SortColumn(StrEnum):
    NUMBER = "number"
    ROOM = "room"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PendingImage:
    """A photo chosen in a form but not uploaded yet."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "PendingImage":
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(filename=path.name, content=path.read_bytes(), content_type=content_type)

    @property
    def preview(self) -> str:
        """Data URL suitable for an <img> preview."""
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.content_type};base64,{encoded}"


@dataclass(frozen=True)
class AddForm:
    number: str = ""
    room: str = ""
    contents: str = ""
    image: Optional[PendingImage] = None

    @property
    def preview(self) -> Optional[str]:
        return self.image.preview if self.image else None


@dataclass(frozen=True)
class EditDraft:
    room: str
    contents: str
    image_url: Optional[str] = None
    image: Optional[PendingImage] = None

    @property
    def preview(self) -> Optional[str]:
        if self.image:
            return self.image.preview
        return self.image_url


@dataclass(frozen=True)
class Viewing:
    pass


@dataclass(frozen=True)
class Editing:
    box_id: int
    draft: EditDraft


EditMode = Union[Viewing, Editing]


@dataclass(frozen=True)
class BoardState:
    all_boxes: Tuple[BoxRead, ...] = ()
    boxes: Tuple[BoxRead, ...] = ()
    add_form: AddForm = field(default_factory=AddForm)
    edit: EditMode = field(default_factory=Viewing)
    tab: Tab = Tab.PACKED
    sort_column: SortColumn = SortColumn.NUMBER
    sort_direction: SortDirection = SortDirection.ASC
    loading: bool = False

    @property
    def editing_id(self) -> Optional[int]:
        return self.edit.box_id if isinstance(self.edit, Editing) else None

    def find_box(self, box_id: int) -> Optional[BoxRead]:
        for box in self.all_boxes:
            if box.id == box_id:
                return box
        return None


# Actions


@dataclass(frozen=True)
class BoxesLoaded:
    boxes: Sequence[BoxRead]


@dataclass(frozen=True)
class BoxesLoadFailed:
    pass


@dataclass(frozen=True)
class AddFieldChanged:
    name: str
    value: str


@dataclass(frozen=True)
class AddImageSelected:
    image: Optional[PendingImage]


@dataclass(frozen=True)
class AddFormReset:
    pass


@dataclass(frozen=True)
class EditStarted:
    box: BoxRead


@dataclass(frozen=True)
class EditFieldChanged:
    name: str
    value: str


@dataclass(frozen=True)
class EditImageSelected:
    image: Optional[PendingImage]


@dataclass(frozen=True)
class EditFinished:
    pass


@dataclass(frozen=True)
class TabSelected:
    tab: Tab


@dataclass(frozen=True)
class SortRequested:
    column: SortColumn


@dataclass(frozen=True)
class LoadingChanged:
    loading: bool


Action = Union[
    BoxesLoaded,
    BoxesLoadFailed,
    AddFieldChanged,
    AddImageSelected,
    AddFormReset,
    EditStarted,
    EditFieldChanged,
    EditImageSelected,
    EditFinished,
    TabSelected,
    SortRequested,
    LoadingChanged,
]

ADD_FORM_FIELDS = ("number", "room", "contents")
EDIT_DRAFT_FIELDS = ("room", "contents")


def suggest_next_number(numbers: Iterable[int]) -> int:
    """Highest existing number plus one; 1 for an empty board."""
    return max(numbers, default=0) + 1


def filter_for_tab(boxes: Iterable[BoxRead], tab: Tab) -> list[BoxRead]:
    if tab == Tab.PACKED:
        return [b for b in boxes if not b.hidden]
    return [b for b in boxes if b.hidden]


def sort_boxes(
    boxes: Iterable[BoxRead], column: SortColumn, direction: SortDirection
) -> list[BoxRead]:
    """Sort by number, or by room ignoring case. Ties keep their input order."""
    if column == SortColumn.ROOM:
        return sorted(
            boxes,
            key=lambda b: b.room.lower(),
            reverse=direction == SortDirection.DESC,
        )
    return sorted(
        boxes, key=lambda b: b.number, reverse=direction == SortDirection.DESC
    )


def _visible(state: BoardState) -> Tuple[BoxRead, ...]:
    return tuple(
        sort_boxes(
            filter_for_tab(state.all_boxes, state.tab),
            state.sort_column,
            state.sort_direction,
        )
    )


def _with_boxes(state: BoardState, boxes: Sequence[BoxRead]) -> BoardState:
    state = replace(state, all_boxes=tuple(boxes))
    next_number = suggest_next_number(b.number for b in state.all_boxes)
    return replace(
        state,
        boxes=_visible(state),
        add_form=replace(state.add_form, number=str(next_number)),
    )


def _edit_draft(state: BoardState, **changes) -> BoardState:
    if not isinstance(state.edit, Editing):
        return state
    draft = replace(state.edit.draft, **changes)
    return replace(state, edit=Editing(box_id=state.edit.box_id, draft=draft))


def reduce(state: BoardState, action: Action) -> BoardState:
    """Apply one action and return the resulting state."""
    if isinstance(action, BoxesLoaded):
        return _with_boxes(state, action.boxes)

    if isinstance(action, BoxesLoadFailed):
        return _with_boxes(state, ())

    if isinstance(action, AddFieldChanged):
        if action.name not in ADD_FORM_FIELDS:
            raise ValueError(f"Unknown add form field {action.name!r}")
        return replace(state, add_form=replace(state.add_form, **{action.name: action.value}))

    if isinstance(action, AddImageSelected):
        return replace(state, add_form=replace(state.add_form, image=action.image))

    if isinstance(action, AddFormReset):
        return replace(
            state,
            add_form=replace(state.add_form, room="", contents="", image=None),
        )

    if isinstance(action, EditStarted):
        # A second start replaces whatever draft was in progress.
        draft = EditDraft(
            room=action.box.room,
            contents=action.box.contents,
            image_url=action.box.image_url,
        )
        return replace(state, edit=Editing(box_id=action.box.id, draft=draft))

    if isinstance(action, EditFieldChanged):
        if action.name not in EDIT_DRAFT_FIELDS:
            raise ValueError(f"Unknown edit field {action.name!r}")
        return _edit_draft(state, **{action.name: action.value})

    if isinstance(action, EditImageSelected):
        return _edit_draft(state, image=action.image)

    if isinstance(action, EditFinished):
        return replace(state, edit=Viewing())

    if isinstance(action, TabSelected):
        state = replace(state, tab=action.tab)
        return replace(state, boxes=_visible(state))

    if isinstance(action, SortRequested):
        if state.sort_column == action.column:
            direction = (
                SortDirection.DESC
                if state.sort_direction == SortDirection.ASC
                else SortDirection.ASC
            )
            state = replace(state, sort_direction=direction)
        else:
            state = replace(
                state, sort_column=action.column, sort_direction=SortDirection.ASC
            )
        return replace(state, boxes=_visible(state))

    if isinstance(action, LoadingChanged):
        return replace(state, loading=action.loading)

    raise TypeError(f"Unsupported action {action!r}")
