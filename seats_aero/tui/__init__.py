from seats_aero.tui.app import App, View, run

__all__ = ["App", "View", "run"]
