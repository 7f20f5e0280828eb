"""High-level load/dump/info API."""

from __future__ import annotations

import logging
from collections import Counter
from typing import BinaryIO, Optional, TextIO, Union

from . import tree
from .channels import Init
from .errors import StructuralError
from .io.writer import record_to_string, write_record
from .models import EventRecord
from .normalization import Normalization
from .pdg import name as pdg_name

logger = logging.getLogger(__name__)

Document = Union[EventRecord, Normalization, Init]

_DOCUMENT_TYPES = {cls.TAG: cls for cls in (EventRecord, Normalization, Init)}


def loads(source: Union[str, bytes]) -> Document:
    """Parse a document, choosing the model from its root element."""
    root = tree.parse_root(source)
    cls = _DOCUMENT_TYPES.get(root.tag)
    if cls is None:
        expected = ", ".join(f"<{t}>" for t in _DOCUMENT_TYPES)
        raise StructuralError(f"unknown root element <{root.tag}>, expected one of {expected}")
    logger.debug("decoding <%s> document", root.tag)
    return cls.from_element(root)


def load(stream: Union[TextIO, BinaryIO]) -> Document:
    return loads(stream.read())


def dumps(
    document: Document,
    *,
    declaration: bool = False,
    generator: Optional[tuple[str, str]] = None,
    pretty: bool = True,
) -> str:
    """Serialise a document.

    Args:
        declaration: Prefix the output with an XML declaration.
        generator: ``(name, version)`` for the header comment. Event
            records only; ignored for other documents.
        pretty: Indent nested elements. Normalization and Init documents
            only; event records always use the fixed line layout.
    """
    if isinstance(document, EventRecord):
        return record_to_string(document, generator=generator, declaration=declaration)
    return document.to_xml(pretty=pretty, declaration=declaration)


def dump(
    document: Document,
    out: TextIO,
    *,
    declaration: bool = False,
    generator: Optional[tuple[str, str]] = None,
    pretty: bool = True,
) -> None:
    if isinstance(document, EventRecord):
        write_record(document, out, generator=generator, declaration=declaration)
    else:
        out.write(document.to_xml(pretty=pretty, declaration=declaration))


def info(record: EventRecord, *, top: Optional[int] = 20) -> dict:
    """Summarise an event record.

    Declared counts are reported next to the actual ones; nothing here
    checks that they agree.
    """
    n_subevents = 0
    n_reweights = 0
    total_particles = 0
    pdg_counts: Counter[int] = Counter()
    channel_counts: Counter[int] = Counter()

    for se in record.iter_subevents():
        n_subevents += 1
        n_reweights += len(se.reweights)
        total_particles += len(se.particles)
        pdg_counts.update(int(p.id.pdg_id) for p in se.particles)
        channel_counts.update(rw.channel for rw in se.reweights)

    return {
        "name": record.name,
        "alpha_s_power": record.alpha_s_power,
        "declared": {
            "nevents": record.nevents,
            "nsubevents": record.nsubevents,
            "nreweights": record.nreweights,
        },
        "n_events": len(record.events),
        "n_subevents": n_subevents,
        "n_reweights": n_reweights,
        "total_particles": total_particles,
        "avg_particles_per_subevent": total_particles / max(1, n_subevents),
        "top_particles": [(pdg_name(pid), count) for pid, count in pdg_counts.most_common(top)],
        "channel_counts": dict(sorted(channel_counts.items())),
    }
