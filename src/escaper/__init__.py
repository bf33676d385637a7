"""ESCAPER

Context-aware output escaping for HTML body text, HTML attribute values,
JavaScript string literals, CSS token values, and URL components, following
the OWASP contextual-escaping recommendations.
"""

from escaper.domain.errors import (
    EscaperError,
    InvalidCodepointError,
    InvalidConfigurationError,
    UnsupportedEncodingError,
)
from escaper.domain.value_objects import EscapeContext
from escaper.engine import Escaper

__all__ = [
    "__version__",
    "EscapeContext",
    "Escaper",
    "EscaperError",
    "InvalidCodepointError",
    "InvalidConfigurationError",
    "UnsupportedEncodingError",
]
__version__ = "0.1.0"
