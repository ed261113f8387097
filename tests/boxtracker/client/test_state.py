"""Tests for the board view-model transitions."""

from datetime import datetime

import pytest

from boxtracker.client.state import (
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
    SortDirection,
    SortRequested,
    Tab,
    TabSelected,
    Viewing,
    filter_for_tab,
    reduce,
    sort_boxes,
    suggest_next_number,
)
from boxtracker.schemas.box import BoxRead


def _box(id, number, room="Kitchen", hidden=False, image_url=None):
    return BoxRead(
        id=id,
        number=number,
        room=room,
        contents=f"box {number}",
        image_url=image_url,
        hidden=hidden,
        created_at=datetime(2026, 1, 1),
    )


@pytest.fixture
def photo():
    return PendingImage(filename="box.png", content=b"\x89PNG", content_type="image/png")


def test_suggest_next_number():
    assert suggest_next_number([1, 3, 7]) == 8
    assert suggest_next_number([]) == 1


def test_sort_by_room_ignores_case():
    boxes = [_box(1, 1, "Kitchen"), _box(2, 2, "attic"), _box(3, 3, "Bedroom")]
    asc = sort_boxes(boxes, SortColumn.ROOM, SortDirection.ASC)
    desc = sort_boxes(boxes, SortColumn.ROOM, SortDirection.DESC)
    assert [b.room for b in asc] == ["attic", "Bedroom", "Kitchen"]
    assert [b.room for b in desc] == ["Kitchen", "Bedroom", "attic"]


def test_sort_by_number_both_directions():
    boxes = [_box(1, 4), _box(2, 1), _box(3, 9)]
    assert [b.number for b in sort_boxes(boxes, SortColumn.NUMBER, SortDirection.ASC)] == [1, 4, 9]
    assert [b.number for b in sort_boxes(boxes, SortColumn.NUMBER, SortDirection.DESC)] == [9, 4, 1]


def test_sort_ties_keep_input_order():
    boxes = [_box(1, 1, "office"), _box(2, 2, "Office"), _box(3, 3, "OFFICE")]
    assert [b.id for b in sort_boxes(boxes, SortColumn.ROOM, SortDirection.ASC)] == [1, 2, 3]


def test_filter_for_tab():
    boxes = [_box(1, 1), _box(2, 2, hidden=True)]
    assert [b.id for b in filter_for_tab(boxes, Tab.PACKED)] == [1]
    assert [b.id for b in filter_for_tab(boxes, Tab.UNPACKED)] == [2]


def test_boxes_loaded_filters_sorts_and_suggests_number():
    boxes = [_box(1, 7), _box(2, 1), _box(3, 3), _box(4, 5, hidden=True)]
    state = reduce(BoardState(), BoxesLoaded(boxes))
    assert [b.number for b in state.boxes] == [1, 3, 7]
    assert len(state.all_boxes) == 4
    assert state.add_form.number == "8"


def test_boxes_load_failed_empties_board():
    state = reduce(BoardState(), BoxesLoaded([_box(1, 4)]))
    state = reduce(state, BoxesLoadFailed())
    assert state.boxes == ()
    assert state.add_form.number == "1"


def test_tab_selected_shows_hidden_boxes():
    state = reduce(BoardState(), BoxesLoaded([_box(1, 1), _box(2, 2, hidden=True)]))
    state = reduce(state, TabSelected(Tab.UNPACKED))
    assert state.tab == Tab.UNPACKED
    assert [b.id for b in state.boxes] == [2]


def test_sort_requested_toggles_direction_on_same_column():
    state = reduce(BoardState(), SortRequested(SortColumn.NUMBER))
    assert state.sort_direction == SortDirection.DESC
    state = reduce(state, SortRequested(SortColumn.NUMBER))
    assert state.sort_direction == SortDirection.ASC


def test_sort_requested_new_column_resets_to_ascending():
    state = BoardState(sort_direction=SortDirection.DESC)
    state = reduce(state, SortRequested(SortColumn.ROOM))
    assert state.sort_column == SortColumn.ROOM
    assert state.sort_direction == SortDirection.ASC


def test_add_form_changes_and_reset(photo):
    state = reduce(BoardState(), AddFieldChanged("number", "4"))
    state = reduce(state, AddFieldChanged("room", "Office"))
    state = reduce(state, AddFieldChanged("contents", "cables"))
    state = reduce(state, AddImageSelected(photo))
    assert state.add_form.preview.startswith("data:image/png;base64,")

    state = reduce(state, AddFormReset())
    assert state.add_form.number == "4"
    assert state.add_form.room == ""
    assert state.add_form.contents == ""
    assert state.add_form.image is None


def test_add_field_unknown_name_raises():
    with pytest.raises(ValueError):
        reduce(BoardState(), AddFieldChanged("priority", "High"))


def test_edit_lifecycle(photo):
    box = _box(3, 3, "Garage", image_url="https://img.example.com/3.jpg")
    state = reduce(BoardState(), EditStarted(box))
    assert isinstance(state.edit, Editing)
    assert state.editing_id == 3
    assert state.edit.draft.room == "Garage"
    assert state.edit.draft.preview == "https://img.example.com/3.jpg"

    state = reduce(state, EditFieldChanged("contents", "bikes"))
    state = reduce(state, EditImageSelected(photo))
    assert state.edit.draft.contents == "bikes"
    assert state.edit.draft.preview.startswith("data:image/png")

    state = reduce(state, EditFinished())
    assert state.edit == Viewing()
    assert state.editing_id is None


def test_second_edit_replaces_first_draft():
    state = reduce(BoardState(), EditStarted(_box(1, 1, "Kitchen")))
    state = reduce(state, EditFieldChanged("room", "Office"))
    state = reduce(state, EditStarted(_box(2, 2, "Attic")))
    assert state.editing_id == 2
    assert state.edit.draft.room == "Attic"


def test_edit_field_ignored_while_viewing():
    state = BoardState()
    assert reduce(state, EditFieldChanged("room", "Office")) == state


def test_loading_changed():
    state = reduce(BoardState(), LoadingChanged(True))
    assert state.loading is True
    assert reduce(state, LoadingChanged(False)).loading is False


def test_reduce_does_not_mutate_input():
    state = BoardState()
    reduce(state, AddFieldChanged("room", "Kitchen"))
    assert state.add_form.room == ""
