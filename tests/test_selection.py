from __future__ import annotations

from medalboard.views.selection import SelectionState


def test_starts_unfiltered():
    selection = SelectionState()

    assert selection.active_country is None
    assert selection.snapshot().state == "Unfiltered"


def test_toggle_selects_then_clears_same_country():
    selection = SelectionState()

    assert selection.toggle("USA") == "USA"
    assert selection.snapshot().state == "FilteredBy(USA)"
    assert selection.toggle("USA") is None
    assert not selection.snapshot().is_filtered


def test_toggle_other_country_replaces_selection():
    selection = SelectionState()
    selection.toggle("USA")

    assert selection.toggle("CHN") == "CHN"


def test_double_toggle_restores_previous_state():
    selection = SelectionState()
    selection.toggle("FRA")

    selection.toggle("JPN")
    selection.toggle("JPN")

    assert selection.active_country is None

    selection.toggle("FRA")
    before = selection.active_country
    selection.toggle("FRA")
    selection.toggle("FRA")
    assert selection.active_country == before


def test_clear_from_any_state():
    selection = SelectionState()
    selection.clear()
    assert selection.active_country is None

    selection.toggle("GBR")
    selection.clear()
    assert selection.active_country is None


def test_snapshot_is_detached_from_later_toggles():
    selection = SelectionState()
    selection.toggle("USA")
    snapshot = selection.snapshot()

    selection.toggle("CHN")

    assert snapshot.active_country == "USA"
