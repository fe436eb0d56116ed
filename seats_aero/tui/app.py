"""
Interactive terminal UI.

The UI is a small message-driven model: key presses and finished searches
arrive as messages, ``App.update`` changes the current screen and may ask
the runner to start a search or quit. The runner owns the threads; the model
is plain state and can be driven directly in tests.
"""

import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

import typer

from seats_aero.client import Client
from seats_aero.config import Config
from seats_aero.models import Availability, SearchParams
from seats_aero.tui import keys, styles
from seats_aero.tui.results import ResultsView
from seats_aero.tui.search import SearchForm

logger = logging.getLogger(__name__)


class View(Enum):
    SEARCH = "search"
    LOADING = "loading"
    RESULTS = "results"
    ERROR = "error"


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class SearchSucceeded:
    request_id: int
    results: List[Availability]


@dataclass(frozen=True)
class SearchFailed:
    request_id: int
    error: Exception


@dataclass(frozen=True)
class StartSearch:
    request_id: int
    params: SearchParams


@dataclass(frozen=True)
class Quit:
    pass


Message = Union[KeyPressed, SearchSucceeded, SearchFailed]
Command = Union[StartSearch, Quit]


class App:
    """Screen state for the search, loading, results and error screens."""

    def __init__(self, config: Config, export_dir: Optional[Path] = None):
        self.view = View.SEARCH
        self.search = SearchForm(config)
        self.results = ResultsView(export_dir=export_dir)
        self.error: Optional[Exception] = None
        self.request_id = 0
        self.quitting = False

    def update(self, message: Message) -> Optional[Command]:
        """
        Apply one message.

        Args:
            message: Key press or search outcome

        Returns:
            Command for the runner, or None
        """
        if isinstance(message, KeyPressed):
            return self._handle_key(message.key)

        if message.request_id != self.request_id or self.view is not View.LOADING:
            # cancelled or superseded
            logger.debug("discarding result of search %d", message.request_id)
            return None

        if isinstance(message, SearchSucceeded):
            self.results.set_results(message.results)
            self.view = View.RESULTS
        elif isinstance(message, SearchFailed):
            self.error = message.error
            self.view = View.ERROR
        return None

    def _handle_key(self, key: str) -> Optional[Command]:
        if key == "ctrl+c":
            self.quitting = True
            return Quit()

        if self.view is View.SEARCH:
            if self.search.handle_key(key):
                self.request_id += 1
                self.view = View.LOADING
                return StartSearch(self.request_id, self.search.search_params())
            return None

        if key in ("esc", "q"):
            self.view = View.SEARCH
            return None

        if self.view is View.RESULTS:
            self.results.handle_key(key)
        return None

    def render(self) -> str:
        if self.quitting:
            return ""
        if self.view is View.SEARCH:
            return self.search.view()
        if self.view is View.RESULTS:
            return self.results.view()
        if self.view is View.LOADING:
            return "\n".join(
                [
                    styles.title("Searching..."),
                    "",
                    styles.subtitle("Fetching availability from seats.aero..."),
                    "",
                    styles.help_text("Press Esc to cancel"),
                ]
            )
        return "\n".join(
            [
                styles.title("Error"),
                "",
                styles.error(f"Error: {self.error}"),
                "",
                styles.help_text("Press Esc to go back"),
            ]
        )


def _read_keys(messages: "queue.Queue[Message]") -> None:
    while True:
        for key in keys.read_keys():
            messages.put(KeyPressed(key))
            if key == "ctrl+c":
                return


def _search_done(messages: "queue.Queue[Message]", request_id: int, future: Future) -> None:
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        messages.put(SearchFailed(request_id, error))
    else:
        messages.put(SearchSucceeded(request_id, future.result()))


def _draw(app: App) -> None:
    typer.clear()
    # the key reader may hold the terminal in raw mode
    typer.echo(app.render().replace("\n", "\r\n"), nl=False)


def run(config: Config, client: Client, export_dir: Optional[Path] = None) -> None:
    """
    Run the terminal UI until the user quits.

    Args:
        config: Loaded configuration, used to prefill the search form
        client: API client shared by every search in this session
        export_dir: Where ``e``/``c`` write exports (working directory by default)
    """
    app = App(config, export_dir=export_dir)
    messages: "queue.Queue[Message]" = queue.Queue()
    threading.Thread(target=_read_keys, args=(messages,), daemon=True).start()

    executor = ThreadPoolExecutor(max_workers=1)
    try:
        while True:
            _draw(app)
            command = app.update(messages.get())
            if isinstance(command, Quit):
                break
            if isinstance(command, StartSearch):
                logger.info("starting search %d", command.request_id)
                future = executor.submit(client.search_all, command.params)
                future.add_done_callback(
                    lambda f, request_id=command.request_id: _search_done(messages, request_id, f)
                )
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
        typer.clear()
