"""Error taxonomy for event record decoding and conversion."""

from __future__ import annotations

from typing import Optional


class RecordError(ValueError):
    """Base class for all stripperxml errors."""


class CodecError(RecordError):
    """A compact comma-separated field could not be decoded."""


class ArityError(CodecError):
    """Wrong number of comma-separated entries in a compact field."""

    def __init__(self, text: str, expected: int, *, minimum: bool = False) -> None:
        self.text = text
        self.expected = expected
        self.minimum = minimum
        qualifier = "at least " if minimum else ""
        super().__init__(
            f"'{text}' is not a comma-separated list with {qualifier}{expected} values"
        )


class FieldParseError(CodecError):
    """A single token is not a valid literal of its target type."""

    def __init__(self, token: str, target: str, reason: str = "") -> None:
        self.token = token
        self.target = target
        msg = f"cannot parse '{token}' as {target}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class UnsupportedStatusError(CodecError):
    """A status code outside the admitted set."""

    def __init__(self, code: int, context: Optional[str] = None) -> None:
        self.code = code
        self.context = context
        msg = f"unsupported status code {code}"
        if context:
            msg += f" ({context})"
        super().__init__(msg)


class StructuralError(RecordError):
    """Malformed markup or a missing element/attribute."""
