"""
Compact field codec.

Several values in the event record format are packed into a single
comma-separated string, either as an attribute (``id="1,21"``) or as the
text of an element (``<p> E,px,py,pz </p>``). Each such value type here
knows how to ``decode`` itself from that string and ``encode`` itself
back. Decoding is strict: the number of entries is checked against the
type's arity, and every entry has to be a literal of its target type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from typing import NamedTuple

from particle import PDGID

from .errors import ArityError, FieldParseError, UnsupportedStatusError
from .pdg import to_pdgid

_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE | re.ASCII,
)
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)

I32 = (-(2**31), 2**31 - 1)
U32 = (0, 2**32 - 1)
I64 = (-(2**63), 2**63 - 1)
U64 = (0, 2**64 - 1)

_RANGE_NAMES = {I32: "i32", U32: "u32", I64: "i64", U64: "u64"}


def split_fields(text: str, arity: int, *, variable: bool = False) -> list[str]:
    """Split ``text`` on commas and check the entry count.

    With ``variable=True`` the arity is a minimum, otherwise it must match
    exactly.
    """
    tokens = text.split(",")
    if len(tokens) < arity or (not variable and len(tokens) != arity):
        raise ArityError(text, arity, minimum=variable)
    return tokens


def parse_float(token: str) -> float:
    if not _FLOAT_RE.fullmatch(token):
        raise FieldParseError(token, "float")
    return float(token)


def parse_int(token: str, bounds: tuple[int, int] = I32) -> int:
    target = _RANGE_NAMES.get(bounds, "integer")
    if not _INT_RE.fullmatch(token):
        raise FieldParseError(token, target)
    value = int(token)
    lo, hi = bounds
    if not lo <= value <= hi:
        raise FieldParseError(token, target, "out of range")
    return value


def format_float(value: float) -> str:
    return repr(float(value))


def format_int(value: int) -> str:
    return str(int(value))


def join_fields(parts) -> str:
    return ",".join(parts)


class Status(IntEnum):
    """Particle status tag of the event record format."""

    OUTGOING = 0
    INCOMING = 1

    @classmethod
    def decode(cls, token: str) -> "Status":
        if token not in ("0", "1"):
            code = parse_int(token)
            raise UnsupportedStatusError(code, f"token {token!r}, particle status must be exactly 0 or 1")
        return cls(int(token))


class Id(NamedTuple):
    """Particle status together with its PDG identity, written ``"status,pdg"``."""

    status: Status
    pdg_id: PDGID

    @classmethod
    def decode(cls, text: str) -> "Id":
        status, pdg_id = split_fields(text, 2)
        return cls(Status.decode(status), to_pdgid(parse_int(pdg_id)))

    def encode(self) -> str:
        return join_fields((format_int(self.status), format_int(self.pdg_id)))


class Momentum(NamedTuple):
    """Four-momentum ``E,px,py,pz``."""

    e: float
    px: float
    py: float
    pz: float

    @classmethod
    def decode(cls, text: str) -> "Momentum":
        return cls(*(parse_float(t) for t in split_fields(text, 4)))

    def encode(self) -> str:
        return join_fields(format_float(x) for x in self)


class XSScale(NamedTuple):
    """Cross section value with its companion uncertainty."""

    value: float
    error: float

    @classmethod
    def decode(cls, text: str) -> "XSScale":
        return cls(*(parse_float(t) for t in split_fields(text, 2)))

    def encode(self) -> str:
        return join_fields(format_float(x) for x in self)


@dataclass
class ReweightPayload:
    """Parton momentum fractions followed by the per-log-term coefficients.

    Attributes:
        x1, x2: Momentum fractions of the two incoming partons.
        log_coeff: Coefficients, one per logarithmic term. The producer
            decides how many there are.
    """

    x1: float
    x2: float
    log_coeff: list[float] = field(default_factory=list)

    @classmethod
    def decode(cls, text: str) -> "ReweightPayload":
        tokens = split_fields(text, 2, variable=True)
        x1, x2, *rest = (parse_float(t) for t in tokens)
        return cls(x1=x1, x2=x2, log_coeff=rest)

    def encode(self) -> str:
        return join_fields(format_float(x) for x in (self.x1, self.x2, *self.log_coeff))


@dataclass
class Channel:
    """A parton channel: ``id,size,a1,b1,a2,b2,...``.

    The entries are kept exactly as decoded.
    """

    entries: list[int] = field(default_factory=list)

    @classmethod
    def decode(cls, text: str) -> "Channel":
        return cls([parse_int(t) for t in split_fields(text, 2, variable=True)])

    def encode(self) -> str:
        return join_fields(format_int(x) for x in self.entries)

    @property
    def channel_id(self) -> int:
        return self.entries[0]

    @property
    def size(self) -> int:
        return self.entries[1]

    def parton_pairs(self) -> list[tuple[int, int]]:
        tail = self.entries[2:]
        return list(zip(tail[0::2], tail[1::2]))
