"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class EscaperError(Exception):
    """Base class for escaper errors."""


# ============================================================================
#                       Configuration related errors
# ============================================================================


class InvalidConfigurationError(EscaperError, ValueError):
    """Raised when an escaper is configured with an empty or unsupported encoding."""

    def __init__(self, encoding: str) -> None:
        if not encoding:
            message = "Encoding identifier must be a non-empty string."
        else:
            message = f"Encoding '{encoding}' is not a supported encoding."
        super().__init__(message)
        self.encoding = encoding


class UnsupportedEncodingError(EscaperError, LookupError):
    """Raised when a transcoder is asked to convert from an encoding it cannot handle."""

    def __init__(self, encoding: str) -> None:
        super().__init__(f"No transcoder available for encoding '{encoding}'.")
        self.encoding = encoding


# ============================================================================
#                       Codepoint related errors
# ============================================================================


class InvalidCodepointError(EscaperError, ValueError):
    """Raised when a codepoint falls outside the Unicode range [0, 0x10FFFF]."""

    def __init__(self, codepoint: int) -> None:
        super().__init__(f"Codepoint {codepoint:#x} is outside of the Unicode range.")
        self.codepoint = codepoint
