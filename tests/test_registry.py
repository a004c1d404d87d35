import pytest

from stock_tracker.errors import AlreadyTrackedError, InvalidSymbolError, NotTrackedError
from stock_tracker.registry import SymbolRegistry


def test_add_normalizes_and_lists_once(registry):
    assert registry.add("  aapl ") == "AAPL"

    with pytest.raises(AlreadyTrackedError):
        registry.add("AAPL")

    assert list(registry.list()) == ["AAPL"]


def test_add_triggers_poll_for_new_symbol_only(state):
    polled = []
    registry = SymbolRegistry(state, on_track=polled.append)

    registry.add("msft")
    with pytest.raises(AlreadyTrackedError):
        registry.add("MSFT")

    assert polled == [["MSFT"]]


def test_blank_symbol_rejected(registry):
    with pytest.raises(InvalidSymbolError):
        registry.add("   ")
    with pytest.raises(ValueError):
        registry.remove("")


def test_remove_discards_history_and_alert(registry, state):
    registry.add("AAPL")
    state.history.record("AAPL", 150.0)
    registry.set_alert("AAPL", 160.0)

    registry.remove("aapl")

    assert "AAPL" not in registry.list()
    assert state.alert_target("AAPL") is None
    with pytest.raises(NotTrackedError):
        state.history.snapshot("AAPL")

    registry.add("AAPL")
    assert state.history.snapshot("AAPL") == ()
    assert registry.alert_for("AAPL") is None


def test_remove_unknown_symbol(registry):
    with pytest.raises(NotTrackedError) as excinfo:
        registry.remove("nope")

    assert excinfo.value.symbol == "NOPE"


def test_set_alert_requires_tracked_symbol(registry):
    with pytest.raises(NotTrackedError):
        registry.set_alert("TSLA", 200)


def test_set_alert_last_write_wins(registry):
    registry.add("TSLA")
    registry.set_alert("tsla", 200)
    registry.set_alert("TSLA", 250.5)

    assert registry.alert_for("TSLA").price == 250.5


def test_clear_alert(registry):
    registry.add("TSLA")
    registry.set_alert("TSLA", 200)

    assert registry.clear_alert("TSLA").price == 200.0
    assert registry.alert_for("TSLA") is None


def test_list_is_restartable_and_insertion_ordered(registry):
    for symbol in ("b", "a", "c"):
        registry.add(symbol)
    listing = registry.list()

    assert list(listing) == ["B", "A", "C"]
    registry.remove("A")
    assert list(listing) == ["B", "C"]
    assert len(listing) == 2


def test_list_survives_concurrent_mutation(registry):
    registry.add("AAPL")
    registry.add("MSFT")

    seen = []
    for symbol in registry.list():
        seen.append(symbol)
        registry.remove(symbol)

    assert seen == ["AAPL", "MSFT"]
    assert list(registry.list()) == []


def test_load_skips_blanks_and_duplicates_without_polling(state):
    polled = []
    registry = SymbolRegistry(state, on_track=polled.append)

    loaded = registry.load(["aapl", "", "  ", "AAPL", "msft\n"])

    assert loaded == ["AAPL", "MSFT"]
    assert list(registry.list()) == ["AAPL", "MSFT"]
    assert polled == []


def test_membership_uses_normalized_symbols(registry):
    registry.add("AAPL")
    listing = registry.list()

    assert "aapl" in listing
    assert " AAPL " in listing
    assert "msft" not in listing
    assert "   " not in listing
    assert 42 not in listing
