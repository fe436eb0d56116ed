import json

import typer

from seats_aero.config import Config
from seats_aero.errors import ErrorKind, SeatsAeroError
from seats_aero.export import ExportFormat
from seats_aero.models import Availability, Cabin
from seats_aero.tui import keys, styles
from seats_aero.tui.app import (
    App,
    KeyPressed,
    Quit,
    SearchFailed,
    SearchSucceeded,
    StartSearch,
    View,
)
from seats_aero.tui.results import ResultsView
from seats_aero.tui.search import FIELD_CABIN, FIELD_DESTINATION, FIELD_ORIGIN, SearchForm

from conftest import availability_record


def _records(count):
    return [Availability.from_dict(availability_record(i)) for i in range(count)]


def _type(app, text):
    command = None
    for ch in text:
        command = app.update(KeyPressed(ch))
    return command


def _submitted_app(tmp_path, config=None):
    app = App(config or Config(), export_dir=tmp_path)
    _type(app, "sfo")
    app.update(KeyPressed("tab"))
    _type(app, "nrt,hnd")
    command = app.update(KeyPressed("enter"))
    return app, command


def test_form_prefills_from_config():
    form = SearchForm(
        Config(preferred_airports=["SFO", "LAX"], default_cabins=["F", "J"], default_sources=["united"])
    )

    assert form.values[FIELD_ORIGIN] == "SFO, LAX"
    assert form.values[FIELD_CABIN] == "F"
    assert form.search_params().sources == ("united",)


def test_form_requires_origin_and_destination():
    form = SearchForm(Config())

    assert form.handle_key("enter") is False
    assert form.message == "Origin and destination are required"
    assert "Origin and destination are required" in typer.unstyle(form.view())


def test_form_rejects_unknown_cabin():
    form = SearchForm(Config(default_cabins=[]))
    form.values[FIELD_ORIGIN] = "SFO"
    form.values[FIELD_DESTINATION] = "NRT"
    form.values[FIELD_CABIN] = "X"

    assert form.handle_key("enter") is False
    assert form.message == "Cabin must be one of Y, W, J, F"


def test_form_editing_keys():
    form = SearchForm(Config())
    for ch in "SFOX":
        form.handle_key(ch)
    form.handle_key("backspace")
    form.handle_key("shift+tab")

    assert form.values[FIELD_ORIGIN] == "SFO"
    assert form.focused == 5


def test_form_respects_field_limits():
    form = SearchForm(Config())
    form.focused = 2
    for ch in "2024-06-01-extra":
        form.handle_key(ch)

    assert form.values[2] == "2024-06-01"


def test_submit_starts_search_with_form_params(tmp_path):
    app, command = _submitted_app(tmp_path)

    assert isinstance(command, StartSearch)
    assert command.request_id == 1
    assert command.params.origin_airports == ("SFO",)
    assert command.params.destination_airports == ("NRT", "HND")
    assert command.params.cabin is Cabin.BUSINESS
    assert app.view is View.LOADING
    assert "Searching..." in typer.unstyle(app.render())


def test_q_is_text_on_the_search_form(tmp_path):
    app = App(Config(), export_dir=tmp_path)

    assert app.update(KeyPressed("q")) is None
    assert app.view is View.SEARCH
    assert app.search.values[FIELD_ORIGIN] == "q"


def test_success_shows_results(tmp_path):
    app, command = _submitted_app(tmp_path)

    app.update(SearchSucceeded(command.request_id, _records(3)))

    assert app.view is View.RESULTS
    assert len(app.results.results) == 3
    assert "Found 3 results" in typer.unstyle(app.render())


def test_failure_shows_error_and_escape_returns(tmp_path):
    app, command = _submitted_app(tmp_path)
    error = SeatsAeroError(ErrorKind.API, "search failed: API error (status 500): boom", status_code=500)

    app.update(SearchFailed(command.request_id, error))

    assert app.view is View.ERROR
    assert "status 500" in typer.unstyle(app.render())
    app.update(KeyPressed("esc"))
    assert app.view is View.SEARCH


def test_cancelled_search_result_is_discarded(tmp_path):
    app, command = _submitted_app(tmp_path)

    app.update(KeyPressed("esc"))
    app.update(SearchSucceeded(command.request_id, _records(2)))

    assert app.view is View.SEARCH
    assert app.results.results == []


def test_superseded_search_result_is_discarded(tmp_path):
    app, first = _submitted_app(tmp_path)
    app.update(KeyPressed("esc"))
    second = app.update(KeyPressed("enter"))

    app.update(SearchSucceeded(first.request_id, _records(5)))
    assert app.view is View.LOADING

    app.update(SearchSucceeded(second.request_id, _records(1)))
    assert app.view is View.RESULTS
    assert len(app.results.results) == 1


def test_ctrl_c_quits_from_any_screen(tmp_path):
    app, _ = _submitted_app(tmp_path)

    assert isinstance(app.update(KeyPressed("ctrl+c")), Quit)
    assert app.render() == ""


def test_results_navigation_scrolls():
    view = ResultsView(height=3)
    view.set_results(_records(5))

    for _ in range(4):
        view.handle_key("j")
    assert view.cursor == 4
    assert view.offset == 2

    view.handle_key("down")
    assert view.cursor == 4

    for _ in range(4):
        view.handle_key("k")
    assert view.cursor == 0
    assert view.offset == 0
    assert view.selected.id == "avail-0"


def test_results_export_json_and_csv(tmp_path):
    view = ResultsView(export_dir=tmp_path)
    view.set_results(_records(2))

    view.handle_key("e")
    assert view.status == f"Exported 2 results to {tmp_path / 'seats_results.json'}"
    assert len(json.loads((tmp_path / "seats_results.json").read_text())) == 2

    view.handle_key("c")
    assert (tmp_path / "seats_results.csv").read_text().count("\n") == 3


def test_results_export_with_nothing_to_export(tmp_path):
    view = ResultsView(export_dir=tmp_path)

    assert view.export(ExportFormat.JSON) is None
    assert view.status == "Nothing to export"
    assert list(tmp_path.iterdir()) == []


def test_results_export_failure_sets_status(tmp_path):
    view = ResultsView(export_dir=tmp_path / "missing")
    view.set_results(_records(1))

    assert view.export(ExportFormat.JSON) is None
    assert view.status.startswith("Export failed:")


def test_normalize_named_keys():
    assert keys.normalize("\t") == ["tab"]
    assert keys.normalize("\x1b[Z") == ["shift+tab"]
    assert keys.normalize("\r") == ["enter"]
    assert keys.normalize("\x1b") == ["esc"]
    assert keys.normalize("\x03") == ["ctrl+c"]


def test_normalize_splits_pasted_text_and_drops_unknown_sequences():
    assert keys.normalize("SFO") == ["S", "F", "O"]
    assert keys.normalize("\x1b[15~") == []


def test_read_keys_maps_interrupt_to_ctrl_c(monkeypatch):
    def interrupted():
        raise KeyboardInterrupt

    monkeypatch.setattr(keys.typer, "getchar", interrupted)

    assert keys.read_keys() == ["ctrl+c"]


def test_box_pads_styled_lines_to_plain_width():
    boxed = styles.box([styles.error("Error"), "plain text"]).split("\n")
    plain = [typer.unstyle(line) for line in boxed]

    assert plain[0] == "╭" + "─" * 12 + "╮"
    assert plain[1] == "│ Error      │"
    assert plain[2] == "│ plain text │"
    assert len({len(line) for line in plain}) == 1


def test_search_form_view_includes_cabin_legend():
    text = typer.unstyle(SearchForm(Config()).view())

    assert "J Business" in text
    assert "W Premium Economy" in text
