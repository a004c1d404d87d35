from stock_tracker.console import TrackerConsole


def test_track_reports_added_and_duplicate(registry):
    console = TrackerConsole(registry)

    assert console.track("aapl") == "AAPL added."
    assert console.track("AAPL") == "AAPL already tracked."
    assert list(registry.list()) == ["AAPL"]


def test_untrack_reports_removed_and_not_found(registry):
    console = TrackerConsole(registry)
    console.track("ibm")

    assert console.untrack("IBM") == "IBM removed."
    assert console.untrack("IBM") == "IBM not found."


def test_set_alert_messages(registry):
    console = TrackerConsole(registry)

    assert console.set_alert("tsla", 200) == "TSLA not tracked. Add it first."
    console.track("tsla")
    assert console.set_alert("tsla", 200) == "Alert set for TSLA at $200.0"


def test_blank_symbol_is_reported(registry):
    console = TrackerConsole(registry)

    assert console.track("  ") == "Please enter a stock symbol."
    assert console.untrack("") == "Please enter a stock symbol."
    assert console.set_alert("", 1.0) == "Please enter a stock symbol."


def test_render_empty(registry):
    assert TrackerConsole(registry).list() == "No stocks tracked."


def test_render_history_chart(registry, state):
    console = TrackerConsole(registry)
    console.track("AAPL")
    console.track("MSFT")
    state.history.record("AAPL", 25.0)
    state.history.record("AAPL", 30.0)
    console.set_alert("AAPL", 28)

    output = console.list()

    assert "AAPL:\nLatest Price: $30.0" in output
    assert "Price History (last 2 updates):" in output
    assert "25.00 ***\n30.00 ***" in output
    assert "Alert target: $28.0" in output
    assert "MSFT:\nNo data yet." in output


def test_exit_message(registry):
    assert TrackerConsole(registry).exit() == "Exiting..."
