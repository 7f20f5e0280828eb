"""Line-oriented writer for event record documents.

The layout is fixed: downstream tools scan these files line by line, so
every tag, particle and reweight entry sits on its own line::

    <Eventrecord nevents="1" nsubevents="1" nreweights="1" as="2" name="Bm">
    <!--
    Record generated with stripperxml 0.1.0
    -->
    <e>
    <se w="-0.0002369763508" muR="91.16253934" muF="91.16253934">
    <p id="1,21">5780.608219,0.0,0.0,5780.608219</p>
    <rw ch="12">0.8893243414,0.05144448245,-0.0002369763508</rw>
    </se>
    </e>
    </Eventrecord>
"""

from __future__ import annotations

import io
import logging
from typing import Optional, TextIO
from xml.sax.saxutils import escape

from lxml import etree

from .. import tree
from ..models import Event, EventRecord, SubEvent

logger = logging.getLogger(__name__)


def _escape_attr(value: str) -> str:
    # attribute-value normalisation would turn raw whitespace controls into spaces
    return escape(value, {'"': "&quot;", "\t": "&#9;", "\n": "&#10;", "\r": "&#13;"})


def _open_tag(tag: str, attributes: dict[str, str]) -> str:
    attrs = " ".join(f'{k}="{_escape_attr(v)}"' for k, v in attributes.items())
    return f"<{tag} {attrs}>\n" if attrs else f"<{tag}>\n"


def _line(el: etree._Element) -> str:
    return etree.tostring(el, encoding="unicode") + "\n"


def _default_generator() -> tuple[str, str]:
    from .. import __version__

    return "stripperxml", __version__


class EventRecordWriter:
    """Write :class:`~stripperxml.models.EventRecord` values to a text stream.

    Args:
        generator: ``(name, version)`` written into the header comment.
            Defaults to this package.
        declaration: Prefix the output with an XML declaration.
    """

    def __init__(self, *, generator: Optional[tuple[str, str]] = None, declaration: bool = False) -> None:
        self.generator = generator or _default_generator()
        self.declaration = declaration

    def write(self, record: EventRecord, out: TextIO) -> None:
        if self.declaration:
            out.write(tree.XML_DECLARATION)
        out.write(_open_tag(record.TAG, record.attributes()))
        name, version = self.generator
        out.write(f"<!--\nRecord generated with {name} {version}\n-->\n")
        for event in record.events:
            self.write_event(event, out)
        out.write(f"</{record.TAG}>\n")
        logger.debug("wrote event record '%s' with %d events", record.name, len(record.events))

    def write_event(self, event: Event, out: TextIO) -> None:
        out.write(f"<{event.TAG}>\n")
        for subevent in event.subevents:
            self.write_subevent(subevent, out)
        out.write(f"</{event.TAG}>\n")

    def write_subevent(self, subevent: SubEvent, out: TextIO) -> None:
        out.write(_open_tag(subevent.TAG, subevent.attributes()))
        for p in subevent.particles:
            out.write(_line(p.to_element()))
        for rw in subevent.reweights:
            out.write(_line(rw.to_element()))
        out.write(f"</{subevent.TAG}>\n")


def write_record(
    record: EventRecord,
    out: TextIO,
    *,
    generator: Optional[tuple[str, str]] = None,
    declaration: bool = False,
) -> None:
    EventRecordWriter(generator=generator, declaration=declaration).write(record, out)


def record_to_string(record: EventRecord, **kwargs) -> str:
    buf = io.StringIO()
    write_record(record, buf, **kwargs)
    return buf.getvalue()
