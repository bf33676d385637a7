"""Per-context escaping rule tables.

Each output context is described by a `ContextRules` value: which codepoints
pass through unchanged and how the remaining ones are formatted. Outputs for
codepoints below 0x100 are precomputed into a table indexed by codepoint;
anything above falls back to the context's formatter.

The URL context works on raw UTF-8 bytes rather than codepoints, so it has
its own byte-indexed table (`URL_BYTE_TABLE`).
"""

from __future__ import annotations

import string
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from types import MappingProxyType

from escaper.domain.codepoints import REPLACEMENT_CHARACTER
from escaper.domain.value_objects import DecodedUnit, EscapeContext

TABLE_SIZE = 0x100

ALNUM = frozenset(map(ord, string.ascii_letters + string.digits))

HTML_IMMUNE = frozenset(map(ord, ",.-_"))
JS_IMMUNE = frozenset(map(ord, ",._"))
CSS_IMMUNE: frozenset[int] = frozenset()
URL_UNRESERVED = frozenset(map(ord, "-._~"))

# Body text only needs the five characters that can open or close markup.
HTML_SPECIAL_CHARS = MappingProxyType(
    {
        ord("'"): "&#039;",
        ord('"'): "&quot;",
        ord("<"): "&lt;",
        ord(">"): "&gt;",
        ord("&"): "&amp;",
    }
)

# Attribute values keep the readable named form where one exists.
HTML_NAMED_ENTITIES = MappingProxyType(
    {
        ord('"'): "&quot;",
        ord("&"): "&amp;",
        ord("<"): "&lt;",
        ord(">"): "&gt;",
    }
)

_ALLOWED_CONTROLS = frozenset(map(ord, "\t\n\r"))


def is_undefined_control(codepoint: int) -> bool:
    """Return True for C0/C1 controls that have no meaning inside HTML text.

    TAB, LF and CR are allowed; NUL and every other C0 control, DEL, and the
    C1 range (0x7F-0x9F) are not.
    """
    return (
        codepoint <= 0x1F and codepoint not in _ALLOWED_CONTROLS
    ) or 0x7F <= codepoint <= 0x9F


def format_html(codepoint: int) -> str:
    return HTML_SPECIAL_CHARS[codepoint]


def format_html_attribute(codepoint: int) -> str:
    """Format a codepoint as an HTML hexadecimal character reference.

    Undefined controls become the replacement character. Codepoints up to
    0xFF use two hex digits, larger ones at least four.
    """
    if is_undefined_control(codepoint):
        codepoint = REPLACEMENT_CHARACTER
    elif entity := HTML_NAMED_ENTITIES.get(codepoint):
        return entity
    if codepoint > 0xFF:
        return f"&#x{codepoint:04X};"
    return f"&#x{codepoint:02X};"


def format_js(codepoint: int) -> str:
    """Format a codepoint as a JavaScript string escape.

    Codepoints outside the BMP are written as a UTF-16 surrogate pair.
    """
    if codepoint < 0x100:
        return f"\\x{codepoint:02X}"
    if codepoint < 0x10000:
        return f"\\u{codepoint:04X}"
    value = codepoint - 0x10000
    high = 0xD800 + (value >> 10)
    low = 0xDC00 + (value & 0x3FF)
    return f"\\u{high:04X}\\u{low:04X}"


def format_css(codepoint: int) -> str:
    # The trailing space terminates the escape.
    return f"\\{codepoint:X} "


@dataclass(frozen=True)
class ContextRules:
    """Escaping rules for a single output context.

    Attributes:
        context: The output context these rules apply to.
        formatter: Produces the escaped form of a codepoint that does not pass.
        immune: Punctuation that passes in addition to ASCII alphanumerics.
        special: When set, the context is allow-by-default and only these
            codepoints are escaped; ``immune`` is then ignored.
        malformed: Output for a byte sequence that is not valid UTF-8.
        table: Precomputed output for every codepoint below ``TABLE_SIZE``.
    """

    context: EscapeContext
    formatter: Callable[[int], str]
    immune: frozenset[int] = frozenset()
    special: frozenset[int] | None = None
    malformed: str = ""
    table: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        table = tuple(self._format(codepoint) for codepoint in range(TABLE_SIZE))
        object.__setattr__(self, "table", table)

    def passes(self, codepoint: int) -> bool:
        """Return True if ``codepoint`` is emitted unchanged in this context."""
        if self.special is not None:
            return codepoint not in self.special
        return codepoint in ALNUM or codepoint in self.immune

    def _format(self, codepoint: int) -> str:
        return chr(codepoint) if self.passes(codepoint) else self.formatter(codepoint)

    def escape_codepoint(self, codepoint: int) -> str:
        """Return the escaped form of a single codepoint."""
        if codepoint < TABLE_SIZE:
            return self.table[codepoint]
        return self._format(codepoint)

    def escape_unit(self, unit: DecodedUnit) -> str:
        if unit.codepoint is None:
            return self.malformed
        return self.escape_codepoint(unit.codepoint)

    def escape_units(self, units: Iterable[DecodedUnit]) -> str:
        """Escape a decoded sequence and join the result."""
        return "".join(self.escape_unit(unit) for unit in units)


HTML_RULES = ContextRules(
    context=EscapeContext.HTML,
    formatter=format_html,
    special=frozenset(HTML_SPECIAL_CHARS),
    malformed=chr(REPLACEMENT_CHARACTER),
)

HTML_ATTRIBUTE_RULES = ContextRules(
    context=EscapeContext.HTML_ATTRIBUTE,
    formatter=format_html_attribute,
    immune=HTML_IMMUNE,
    malformed=format_html_attribute(REPLACEMENT_CHARACTER),
)

JS_RULES = ContextRules(
    context=EscapeContext.JS,
    formatter=format_js,
    immune=JS_IMMUNE,
)

CSS_RULES = ContextRules(
    context=EscapeContext.CSS,
    formatter=format_css,
    immune=CSS_IMMUNE,
)

CODEPOINT_RULES = MappingProxyType(
    {
        rules.context: rules
        for rules in (HTML_RULES, HTML_ATTRIBUTE_RULES, JS_RULES, CSS_RULES)
    }
)

URL_BYTE_TABLE = tuple(
    chr(byte) if byte in ALNUM or byte in URL_UNRESERVED else f"%{byte:02X}"
    for byte in range(TABLE_SIZE)
)


def escape_url_bytes(data: bytes) -> str:
    """Percent-encode every byte of ``data`` outside the RFC 3986 unreserved set."""
    return "".join(URL_BYTE_TABLE[byte] for byte in data)
