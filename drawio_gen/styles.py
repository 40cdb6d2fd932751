"""
Structured draw.io style strings.

draw.io stores a cell's style as a semicolon-joined blob such as
``rhombus;whiteSpace=wrap;fillColor=#dae8fc;``. Internally we keep it as an
ordered key -> value mapping and only serialize at the encoder boundary, so
layering theme values and overrides never produces duplicate keys.
"""
from typing import Iterable, Optional, Union

StyleValue = Optional[str]


class StyleMap(dict):
    """
    Ordered mapping of style keys to values.

    Bare flag tokens (``rhombus``, ``ellipse``, ``swimlane``) are stored with
    a value of ``None`` and serialized without ``=``.
    """

    @classmethod
    def parse(cls, text: str) -> "StyleMap":
        """Parse a ``key=value;flag;`` style string."""
        style = cls()
        for token in text.split(";"):
            token = token.strip()
            if not token:
                continue
            if "=" in token:
                key, _, value = token.partition("=")
                style[key.strip()] = value.strip()
            else:
                style[token] = None
        return style

    def set(self, key: str, value: Union[str, int, float, bool, None]) -> "StyleMap":
        """Set a key, converting booleans to draw.io's 1/0 and numbers to text."""
        if isinstance(value, bool):
            value = "1" if value else "0"
        elif isinstance(value, (int, float)):
            value = _number_text(value)
        self[key] = value
        return self

    def merge(self, pairs: Iterable[tuple]) -> "StyleMap":
        """Set several keys in order; later keys win."""
        for key, value in pairs:
            self.set(key, value)
        return self

    def copy(self) -> "StyleMap":
        return StyleMap(self)

    def flag(self, key: str) -> bool:
        """True when ``key=1`` (or a bare ``key`` token) is present."""
        if key not in self:
            return False
        value = self[key]
        return value is None or value == "1"

    def text(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self.get(key)
        return default if value is None else value

    def number(self, key: str, default: float) -> float:
        """Numeric value of ``key``, or ``default`` when missing or malformed."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            return default

    def serialize(self) -> str:
        parts = [key if value is None else f"{key}={value}" for key, value in self.items()]
        return "".join(f"{part};" for part in parts)

    def __str__(self) -> str:
        return self.serialize()


def _number_text(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
