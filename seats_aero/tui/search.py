"""Search form screen."""

from seats_aero.config import Config
from seats_aero.models import Cabin, SearchParams, parse_list
from seats_aero.tui import styles

FIELD_ORIGIN = 0
FIELD_DESTINATION = 1
FIELD_START_DATE = 2
FIELD_END_DATE = 3
FIELD_CABIN = 4
FIELD_SOURCE = 5

LABELS = [
    "Origin airports:",
    "Destination airports:",
    "Start date:",
    "End date:",
    "Cabin class:",
    "Mileage program:",
]

PLACEHOLDERS = [
    "SFO, LAX",
    "NRT, HND",
    "2024-06-01",
    "2024-06-15 (optional)",
    "J (optional)",
    "aeroplan, united (optional)",
]

CHAR_LIMITS = [50, 50, 10, 10, 10, 100]


class SearchForm:
    """Six text fields edited one key at a time."""

    def __init__(self, config: Config):
        self.values = [""] * len(LABELS)
        self.focused = FIELD_ORIGIN
        self.message = ""

        if config.preferred_airports:
            self.values[FIELD_ORIGIN] = ", ".join(config.preferred_airports)
        if config.default_cabins:
            # the form takes one cabin; the first configured one wins
            self.values[FIELD_CABIN] = config.default_cabins[0]
        if config.default_sources:
            self.values[FIELD_SOURCE] = ", ".join(config.default_sources)

    def handle_key(self, key: str) -> bool:
        """
        Apply one key press to the form.

        Args:
            key: Normalized key name or a single printable character

        Returns:
            True when the form was submitted with valid input
        """
        if key in ("tab", "down"):
            self.focused = (self.focused + 1) % len(LABELS)
        elif key in ("shift+tab", "up"):
            self.focused = (self.focused - 1) % len(LABELS)
        elif key == "enter":
            error = self.validate()
            if error is None:
                self.message = ""
                return True
            self.message = error
            self.focused = (self.focused + 1) % len(LABELS)
        elif key == "backspace":
            self.values[self.focused] = self.values[self.focused][:-1]
        elif len(key) == 1 and key.isprintable():
            if len(self.values[self.focused]) < CHAR_LIMITS[self.focused]:
                self.values[self.focused] += key
        return False

    def validate(self):
        if not self.values[FIELD_ORIGIN].strip() or not self.values[FIELD_DESTINATION].strip():
            return "Origin and destination are required"
        try:
            Cabin.parse_optional(self.values[FIELD_CABIN])
        except ValueError:
            return "Cabin must be one of Y, W, J, F"
        return None

    def search_params(self) -> SearchParams:
        return SearchParams(
            origin_airports=tuple(parse_list(self.values[FIELD_ORIGIN])),
            destination_airports=tuple(parse_list(self.values[FIELD_DESTINATION])),
            start_date=self.values[FIELD_START_DATE].strip(),
            end_date=self.values[FIELD_END_DATE].strip(),
            cabin=Cabin.parse_optional(self.values[FIELD_CABIN]),
            sources=tuple(parse_list(self.values[FIELD_SOURCE], upper=False)),
        )

    def view(self) -> str:
        lines = [
            styles.title("seats.aero Search"),
            styles.subtitle("Search for award flight availability"),
            "",
        ]
        for index, text in enumerate(LABELS):
            value = self.values[index] or styles.subtitle(PLACEHOLDERS[index])
            if index == self.focused:
                lines.append(styles.focused(styles.label(text) + value + "_"))
            else:
                lines.append(styles.blurred(styles.label(text) + value))

        if self.message:
            lines += ["", styles.error(self.message)]
        lines += [
            "",
            styles.help_text("Tab/Up/Down: navigate  |  Enter: search  |  Ctrl-C: quit"),
            "",
            styles.box(
                [
                    styles.subtitle("Cabin classes:"),
                    "  ".join(styles.cabin(c, c.code) + f" {c.display_name}" for c in Cabin),
                ]
            ),
        ]
        return "\n".join(lines)
