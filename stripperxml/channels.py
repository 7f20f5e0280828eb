"""Parton channel definitions (the ``<Init>`` document)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from lxml import etree

from . import tree
from .codec import Channel


@dataclass
class Init:
    """Run setup: incoming beams, scale choice and the parton channels.

    Channels are listed under ``<Channels>`` as repeated ``<Channel>``
    elements, each holding an integer list (see :class:`~stripperxml.codec.Channel`).
    """

    TAG: ClassVar[str] = "Init"

    incoming: str = ""
    scales: str = ""
    channels: list[Channel] = field(default_factory=list)

    @classmethod
    def from_element(cls, el: etree._Element) -> "Init":
        channels_el = tree.child(el, "Channels")
        return cls(
            incoming=tree.child_text(el, "Incoming"),
            scales=tree.child_text(el, "Scales"),
            channels=[tree.decode_text(c, Channel.decode) for c in tree.children(channels_el, "Channel")],
        )

    @classmethod
    def from_xml(cls, source: Union[str, bytes]) -> "Init":
        return cls.from_element(tree.parse_root(source, cls.TAG))

    def channel(self, channel_id: int) -> Optional[Channel]:
        """Look up a channel by the id in its first entry."""
        for ch in self.channels:
            if ch.entries and ch.channel_id == channel_id:
                return ch
        return None

    def to_element(self) -> etree._Element:
        el = etree.Element(self.TAG)
        tree.sub_text(el, "Incoming", self.incoming)
        tree.sub_text(el, "Scales", self.scales)
        channels_el = etree.SubElement(el, "Channels")
        for ch in self.channels:
            tree.sub_text(channels_el, "Channel", ch.encode())
        return el

    def to_xml(self, *, pretty: bool = True, declaration: bool = False) -> str:
        return tree.tostring(self.to_element(), pretty=pretty, declaration=declaration)
