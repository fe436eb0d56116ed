"""Client, CLI and terminal UI for the seats.aero partner API."""

__version__ = "0.1.0"
