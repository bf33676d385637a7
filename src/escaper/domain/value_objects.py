"""Module including value objects used across the domain layer."""

from dataclasses import dataclass
from enum import Enum


class EscapeContext(Enum):
    """Enumeration of output contexts an escaper can target"""

    HTML = "html"
    HTML_ATTRIBUTE = "html_attribute"
    JS = "js"
    CSS = "css"
    URL = "url"


@dataclass(frozen=True, slots=True)
class DecodedUnit:
    """Value object representing one unit decoded from a UTF-8 byte string.

    ``codepoint`` is ``None`` when the bytes did not form a valid UTF-8
    sequence; ``length`` is the number of bytes consumed either way.
    """

    codepoint: int | None
    length: int

    @property
    def is_malformed(self) -> bool:
        """Return True if the unit did not decode to a Unicode scalar value."""
        return self.codepoint is None
