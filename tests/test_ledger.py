import pytest

from screening.data.ledger import MarkerLedger
from screening.data.models import Marker, SortMode
from screening.utils.exceptions import ValidationError


def test_capture_assigns_increasing_ids():
    ledger = MarkerLedger()
    a = ledger.capture(10)
    b = ledger.capture(5)
    assert (a.id, b.id) == (1, 2)
    assert a.comment == ""
    assert len(ledger) == 2


def test_ids_never_reused_after_clear():
    ledger = MarkerLedger()
    ledger.capture(1)
    ledger.capture(2)
    ledger.clear()
    assert ledger.is_empty()
    assert ledger.capture(3).id == 3


def test_capture_rejects_negative_frame():
    with pytest.raises(ValidationError):
        MarkerLedger().capture(-1)


def test_sort_modes():
    ledger = MarkerLedger()
    for f in (48, 24, 72):
        ledger.capture(f)

    assert [m.frame_index for m in ledger.list(SortMode.CREATED)] == [48, 24, 72]
    assert [m.id for m in ledger.list("timecode")] == [2, 1, 3]


def test_timecode_sort_is_stable_for_equal_frames():
    ledger = MarkerLedger()
    ledger.capture(50)
    ledger.capture(10)
    ledger.capture(50)
    ledger.capture(10)
    assert [m.id for m in ledger.list(SortMode.TIMECODE)] == [2, 4, 1, 3]


def test_list_returns_copy():
    ledger = MarkerLedger()
    ledger.capture(1)
    listing = ledger.list()
    listing.clear()
    assert len(ledger) == 1


def test_edit_comment():
    ledger = MarkerLedger()
    m = ledger.capture(7)
    assert ledger.edit_comment(m.id, "intro")
    assert ledger.get(m.id) == Marker(id=1, frame_index=7, comment="intro")
    assert ledger.edit_comment(m.id, "")
    assert ledger.get(m.id).comment == ""


def test_edit_comment_unknown_id_is_noop():
    ledger = MarkerLedger()
    ledger.capture(7)
    assert not ledger.edit_comment(99, "x")
    assert ledger.get(99) is None
    assert ledger.get(1).comment == ""


def test_unknown_sort_mode():
    with pytest.raises(ValidationError) as exc:
        MarkerLedger().list("alphabetical")
    assert "created" in str(exc.value)
