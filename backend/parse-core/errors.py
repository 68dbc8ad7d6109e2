from __future__ import annotations

SKIP_PARSE_ERROR = "parse_error"
SKIP_NO_DECLARATION = "no_primary_declaration"
SKIP_UNSUPPORTED_KIND = "unsupported_declaration_kind"
SKIP_INTERNAL_ERROR = "internal_error"


class UnitParseError(ValueError):
    """Raised by an adapter when a source unit cannot be parsed."""


class UnitSkipped(Exception):
    """
    A unit that yields no model. Low severity: the run goes on with the
    other units and the caller gets a diagnostic for this one.
    """

    def __init__(self, reason: str, detail: str = "") -> None:
        super().__init__(f"{reason}: {detail}" if detail else reason)
        self.reason = reason
        self.detail = detail
