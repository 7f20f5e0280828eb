"""
Event record data model.

An event record document looks like::

    <Eventrecord nevents="2286" nsubevents="2286" nreweights="2286" as="2" name="Bm">
    <e>
    <se w="-0.0002369763508" muR="91.16253934" muF="91.16253934">
    <p id="1,21"> 5780.608219,0,0,5780.608219 </p>
    ...
    <rw ch="12"> 0.8893243414,0.05144448245,-0.0002369763508 </rw>
    </se>
    </e>
    </Eventrecord>

Every element maps onto one dataclass below. The comma-packed values are
handled by the types in :mod:`stripperxml.codec`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from lxml import etree

from . import tree
from .codec import (
    I64,
    U32,
    U64,
    Id,
    Momentum,
    ReweightPayload,
    Status,
    format_float,
    format_int,
    parse_float,
    parse_int,
)


@dataclass
class Particle:
    """An incoming or outgoing particle of a sub-event.

    Attributes:
        id: Status tag and PDG identity, ``id="status,pdg"`` in the document.
        momentum: Four-momentum (E, px, py, pz), the element text.
    """

    TAG: ClassVar[str] = "p"

    id: Id
    momentum: Momentum

    @property
    def status(self) -> Status:
        return self.id.status

    @property
    def pdg_id(self) -> int:
        return self.id.pdg_id

    @property
    def is_incoming(self) -> bool:
        return self.id.status == Status.INCOMING

    @property
    def is_outgoing(self) -> bool:
        return self.id.status == Status.OUTGOING

    @classmethod
    def from_element(cls, el: etree._Element) -> "Particle":
        return cls(
            id=tree.decode_attr(el, "id", Id.decode),
            momentum=tree.decode_text(el, Momentum.decode),
        )

    def to_element(self) -> etree._Element:
        return tree.text_element(self.TAG, self.momentum.encode(), id=self.id.encode())


@dataclass
class Reweight:
    """Reweighting entry for one channel.

    Attributes:
        channel: Index of the parton channel, ``ch`` attribute.
        reweights: Momentum fractions and log coefficients, the element text.
    """

    TAG: ClassVar[str] = "rw"

    channel: int
    reweights: ReweightPayload

    @classmethod
    def from_element(cls, el: etree._Element) -> "Reweight":
        return cls(
            channel=parse_int(tree.attr(el, "ch"), U32),
            reweights=tree.decode_text(el, ReweightPayload.decode),
        )

    def to_element(self) -> etree._Element:
        return tree.text_element(self.TAG, self.reweights.encode(), ch=format_int(self.channel))


@dataclass
class SubEvent:
    """One weighted realisation of an event.

    Attributes:
        weight: Event weight (signed).
        mu_r: Renormalisation scale in GeV.
        mu_f: Factorisation scale in GeV.
        particles: Particles in document order.
        reweights: Reweighting entries in document order.
    """

    TAG: ClassVar[str] = "se"

    weight: float = 0.0
    mu_r: float = 0.0
    mu_f: float = 0.0
    particles: list[Particle] = field(default_factory=list)
    reweights: list[Reweight] = field(default_factory=list)

    @property
    def incoming_particles(self) -> list[Particle]:
        return [p for p in self.particles if p.is_incoming]

    @property
    def outgoing_particles(self) -> list[Particle]:
        return [p for p in self.particles if p.is_outgoing]

    @classmethod
    def from_element(cls, el: etree._Element) -> "SubEvent":
        return cls(
            weight=tree.decode_attr(el, "w", parse_float),
            mu_r=tree.decode_attr(el, "muR", parse_float),
            mu_f=tree.decode_attr(el, "muF", parse_float),
            particles=[Particle.from_element(p) for p in tree.children(el, Particle.TAG)],
            reweights=[Reweight.from_element(rw) for rw in tree.children(el, Reweight.TAG)],
        )

    @classmethod
    def from_xml(cls, source: Union[str, bytes]) -> "SubEvent":
        return cls.from_element(tree.parse_root(source, cls.TAG))

    def attributes(self) -> dict[str, str]:
        return {
            "w": format_float(self.weight),
            "muR": format_float(self.mu_r),
            "muF": format_float(self.mu_f),
        }

    def to_element(self) -> etree._Element:
        el = etree.Element(self.TAG, self.attributes())
        el.extend([p.to_element() for p in self.particles])
        el.extend([rw.to_element() for rw in self.reweights])
        return el


@dataclass
class Event:
    """A physics event, made of one or more sub-events.

    Sub-event order is significant and is preserved on read and write.
    """

    TAG: ClassVar[str] = "e"

    subevents: list[SubEvent] = field(default_factory=list)

    @classmethod
    def from_element(cls, el: etree._Element) -> "Event":
        return cls(subevents=[SubEvent.from_element(se) for se in tree.children(el, SubEvent.TAG)])

    def to_element(self) -> etree._Element:
        el = etree.Element(self.TAG)
        el.extend([se.to_element() for se in self.subevents])
        return el


@dataclass
class EventRecord:
    """A complete event record document.

    The counts are copied from and to the document verbatim. They are
    producer metadata and are not checked against ``events``.

    Attributes:
        nevents: Declared number of events.
        nsubevents: Declared number of sub-events.
        nreweights: Declared number of reweighting entries.
        alpha_s_power: Power of the strong coupling, ``as`` attribute.
        name: Process name.
        events: Events in document order.
    """

    TAG: ClassVar[str] = "Eventrecord"

    nevents: int = 0
    nsubevents: int = 0
    nreweights: int = 0
    alpha_s_power: int = 0
    name: str = ""
    events: list[Event] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

    def __getitem__(self, idx):
        return self.events[idx]

    def iter_subevents(self):
        for event in self.events:
            yield from event.subevents

    @classmethod
    def from_element(cls, el: etree._Element) -> "EventRecord":
        return cls(
            nevents=parse_int(tree.attr(el, "nevents"), U64),
            nsubevents=parse_int(tree.attr(el, "nsubevents"), U64),
            nreweights=parse_int(tree.attr(el, "nreweights"), U64),
            alpha_s_power=parse_int(tree.attr(el, "as"), I64),
            name=tree.attr(el, "name", strip=False),
            events=[Event.from_element(e) for e in tree.children(el, Event.TAG)],
        )

    @classmethod
    def from_xml(cls, source: Union[str, bytes]) -> "EventRecord":
        return cls.from_element(tree.parse_root(source, cls.TAG))

    def attributes(self) -> dict[str, str]:
        return {
            "nevents": format_int(self.nevents),
            "nsubevents": format_int(self.nsubevents),
            "nreweights": format_int(self.nreweights),
            "as": format_int(self.alpha_s_power),
            "name": self.name,
        }

    def to_element(self) -> etree._Element:
        el = etree.Element(self.TAG, self.attributes())
        el.extend([e.to_element() for e in self.events])
        return el
