import io

from omnistore.adapters.console import LineAdapter
from omnistore.handlers.dispatcher import CommandDispatcher
from omnistore.state.store import Store


def _dispatcher(tmp_path):
    store = Store(tmp_path / "omniStore")
    store.open()
    return CommandDispatcher(store)


def test_feeds_lines_and_reports_loads(tmp_path):
    dispatcher = _dispatcher(tmp_path)
    loaded: list[str] = []
    adapter = LineAdapter(dispatcher, on_load=loaded.append)

    stream = io.StringIO("savedata a:1\r\nloaddata a\nloaddata b\nbogus\n")
    applied = adapter.run(stream)

    assert applied == 3
    assert loaded == ["1", ""]
    assert dispatcher.retrieved_value() == ""


def test_strips_line_terminators_only(tmp_path):
    dispatcher = _dispatcher(tmp_path)
    adapter = LineAdapter(dispatcher)
    adapter.feed("savedata key : value \r\n")
    assert dispatcher.store.snapshot() == {"key": "value"}


def test_rejected_load_is_not_reported(tmp_path):
    dispatcher = _dispatcher(tmp_path)
    loaded: list[str] = []
    adapter = LineAdapter(dispatcher, on_load=loaded.append)
    adapter.feed("loaddata a:b")
    assert loaded == []
