"""
Normalization records: cross sections, event counts and rejection statistics.

Producers write the cross-section block with either a ``Pos`` or a ``Neg``
suffix on every field (``XSPos``/``XSNeg``, ``MaxWeightPos``/``MaxWeightNeg``,
...). Both spellings decode into the same fields; the suffix that was seen
is remembered in :attr:`XSection.variant` and reused on output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Union

from lxml import etree

from . import tree
from .codec import U64, XSScale, format_float, format_int, parse_float, parse_int
from .errors import StructuralError

logger = logging.getLogger(__name__)

VARIANTS = ("Pos", "Neg")


def _resolve(el: etree._Element, stem: str) -> tuple[str, str]:
    """Find ``<stem>Pos`` or ``<stem>Neg`` below ``el``.

    Returns the element text and the suffix it was found under. When both
    are present the ``Pos`` spelling wins.
    """
    found = {v: el.find(stem + v) for v in VARIANTS}
    present = [v for v in VARIANTS if found[v] is not None]
    if not present:
        raise StructuralError(
            f"<{el.tag}> is missing required element <{stem}Pos> or <{stem}Neg>"
        )
    if len(present) > 1:
        logger.warning("both <%sPos> and <%sNeg> present in <%s>; using <%sPos>", stem, stem, el.tag, stem)
    variant = present[0]
    return tree.text(found[variant]), variant


@dataclass
class XSection:
    """Cross section summary of one contribution.

    Attributes:
        xs: Cross section and its uncertainty.
        max_weight: Largest event weight seen.
        total_events: Number of generated events.
        accepted_events: Number of accepted events.
        factor: Correction factor pair, kept as written.
        variant: ``"Pos"`` or ``"Neg"``, the producer's field suffix.
    """

    TAG: ClassVar[str] = "XSection"

    xs: XSScale = XSScale(0.0, 0.0)
    max_weight: float = 0.0
    total_events: int = 0
    accepted_events: int = 0
    factor: str = ""
    variant: str = "Pos"

    @classmethod
    def from_element(cls, el: etree._Element) -> "XSection":
        xs, variant = _resolve(el, "XS")
        max_weight, _ = _resolve(el, "MaxWeight")
        total, _ = _resolve(el, "TotalEvents")
        accepted, _ = _resolve(el, "AcceptedEvents")
        factor, _ = _resolve(el, "Factor")
        return cls(
            xs=XSScale.decode(xs),
            max_weight=parse_float(max_weight),
            total_events=parse_int(total, U64),
            accepted_events=parse_int(accepted, U64),
            factor=factor,
            variant=variant,
        )

    @classmethod
    def from_xml(cls, source: Union[str, bytes]) -> "XSection":
        return cls.from_element(tree.parse_root(source, cls.TAG))

    def to_element(self) -> etree._Element:
        if self.variant not in VARIANTS:
            raise ValueError(f"XSection variant must be one of {VARIANTS}, got {self.variant!r}")
        v = self.variant
        el = etree.Element(self.TAG)
        tree.sub_text(el, "XS" + v, self.xs.encode())
        tree.sub_text(el, "MaxWeight" + v, format_float(self.max_weight))
        tree.sub_text(el, "TotalEvents" + v, format_int(self.total_events))
        tree.sub_text(el, "AcceptedEvents" + v, format_int(self.accepted_events))
        tree.sub_text(el, "Factor" + v, self.factor)
        return el


@dataclass
class ContributionReweight:
    """Labels of the reweighting terms, in the order they appear in events."""

    TAG: ClassVar[str] = "rw"

    rwentry: list[str] = field(default_factory=list)

    @classmethod
    def from_element(cls, el: etree._Element) -> "ContributionReweight":
        return cls(rwentry=[tree.text(e) for e in tree.children(el, "rwentry")])

    def to_element(self) -> etree._Element:
        el = etree.Element(self.TAG)
        for label in self.rwentry:
            tree.sub_text(el, "rwentry", label)
        return el


@dataclass
class Contribution:
    TAG: ClassVar[str] = "Contribution"

    name: str = ""
    xsection: XSScale = XSScale(0.0, 0.0)
    rw: ContributionReweight = field(default_factory=ContributionReweight)

    @classmethod
    def from_element(cls, el: etree._Element) -> "Contribution":
        return cls(
            name=tree.attr(el, "name", strip=False),
            xsection=tree.decode_child(el, "xsection", XSScale.decode),
            rw=ContributionReweight.from_element(tree.child(el, ContributionReweight.TAG)),
        )

    def to_element(self) -> etree._Element:
        el = etree.Element(self.TAG, name=self.name)
        tree.sub_text(el, "xsection", self.xsection.encode())
        el.append(self.rw.to_element())
        return el


@dataclass
class Normalization:
    """A ``<Normalization>`` document.

    ``number_of_rejected_events`` is kept as an opaque string; its format
    differs between producers.
    """

    TAG: ClassVar[str] = "Normalization"

    name: str = ""
    xsection: XSection = field(default_factory=XSection)
    contribution: Contribution = field(default_factory=Contribution)
    number_of_rejected_events: str = ""

    @classmethod
    def from_element(cls, el: etree._Element) -> "Normalization":
        return cls(
            name=tree.attr(el, "name", strip=False),
            xsection=XSection.from_element(tree.child(el, XSection.TAG)),
            contribution=Contribution.from_element(tree.child(el, Contribution.TAG)),
            number_of_rejected_events=tree.child_text(el, "NumberOfRejectedEvents"),
        )

    @classmethod
    def from_xml(cls, source: Union[str, bytes]) -> "Normalization":
        return cls.from_element(tree.parse_root(source, cls.TAG))

    def to_element(self) -> etree._Element:
        el = etree.Element(self.TAG, name=self.name)
        el.append(self.xsection.to_element())
        el.append(self.contribution.to_element())
        tree.sub_text(el, "NumberOfRejectedEvents", self.number_of_rejected_events)
        return el

    def to_xml(self, *, pretty: bool = True, declaration: bool = False) -> str:
        return tree.tostring(self.to_element(), pretty=pretty, declaration=declaration)
