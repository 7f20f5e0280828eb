"""stripperxml: codec for STRIPPER XML event records."""

from __future__ import annotations

__version__ = "0.1.0"

from .channels import Init
from .codec import Channel, Id, Momentum, ReweightPayload, Status, XSScale
from .convert import dump, dumps, info, load, loads
from .errors import ArityError, FieldParseError, RecordError, StructuralError, UnsupportedStatusError
from .hepmc import graph_to_subevent, subevent_to_graph
from .models import Event, EventRecord, Particle, Reweight, SubEvent
from .normalization import Contribution, Normalization, XSection

__all__ = [
    "__version__",
    "load",
    "loads",
    "dump",
    "dumps",
    "info",
    "EventRecord",
    "Event",
    "SubEvent",
    "Particle",
    "Reweight",
    "Status",
    "Id",
    "Momentum",
    "ReweightPayload",
    "XSScale",
    "Channel",
    "Init",
    "Normalization",
    "XSection",
    "Contribution",
    "subevent_to_graph",
    "graph_to_subevent",
    "RecordError",
    "ArityError",
    "FieldParseError",
    "UnsupportedStatusError",
    "StructuralError",
]
