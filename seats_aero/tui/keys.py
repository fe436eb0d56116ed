"""Translate raw terminal input into key names."""

from typing import List

import typer

KEY_NAMES = {
    "\t": "tab",
    "\x1b[Z": "shift+tab",
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\xe0H": "up",
    "\xe0P": "down",
    "\r": "enter",
    "\n": "enter",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x1b": "esc",
    "\x03": "ctrl+c",
    "\x04": "ctrl+c",
}


def normalize(raw: str) -> List[str]:
    """
    Split one terminal read into key names.

    Named keys map through KEY_NAMES; pasted text becomes one entry per
    character; unrecognized escape sequences are dropped.
    """
    if raw in KEY_NAMES:
        return [KEY_NAMES[raw]]
    if raw.startswith("\x1b"):
        return []
    return [KEY_NAMES.get(ch, ch) for ch in raw if ch.isprintable() or ch in KEY_NAMES]


def read_keys() -> List[str]:
    """Block until the next key press."""
    try:
        raw = typer.getchar()
    except (KeyboardInterrupt, EOFError):
        return ["ctrl+c"]
    return normalize(raw)
