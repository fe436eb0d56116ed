from seats_aero.cli import app

app(prog_name="seats")
