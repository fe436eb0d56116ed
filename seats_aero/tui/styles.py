"""Text styles for the terminal UI."""

import typer

from seats_aero.models import Cabin

PRIMARY = "magenta"
MUTED = "bright_black"

CABIN_COLORS = {
    Cabin.ECONOMY: "green",
    Cabin.PREMIUM: "cyan",
    Cabin.BUSINESS: "magenta",
    Cabin.FIRST: "yellow",
}


def title(text: str) -> str:
    return typer.style(text, fg=PRIMARY, bold=True)


def subtitle(text: str) -> str:
    return typer.style(text, fg=MUTED)


def label(text: str, width: int = 22) -> str:
    return typer.style(f"{text:<{width}}", bold=True)


def focused(text: str) -> str:
    return typer.style(f"> {text}", fg=PRIMARY, bold=True)


def blurred(text: str) -> str:
    return f"  {text}"


def selected_row(text: str) -> str:
    return typer.style(text, fg="white", bg=PRIMARY)


def help_text(text: str) -> str:
    return typer.style(text, fg=MUTED, dim=True)


def error(text: str) -> str:
    return typer.style(text, fg="red", bold=True)


def success(text: str) -> str:
    return typer.style(text, fg="green")


def cabin(cabin: Cabin, text: str) -> str:
    return typer.style(text, fg=CABIN_COLORS[cabin])


def box(lines) -> str:
    """Draw a rounded border around ``lines``; width ignores ANSI styling."""
    plain = [typer.unstyle(line) for line in lines]
    width = max((len(line) for line in plain), default=0)
    top = typer.style("╭" + "─" * (width + 2) + "╮", fg=MUTED)
    bottom = typer.style("╰" + "─" * (width + 2) + "╯", fg=MUTED)
    side = typer.style("│", fg=MUTED)
    body = [
        f"{side} {line}{' ' * (width - len(raw))} {side}"
        for line, raw in zip(lines, plain)
    ]
    return "\n".join([top, *body, bottom])


def header(text: str) -> str:
    return typer.style(text, bold=True)
