from __future__ import annotations

from .hepmc2 import HepMC2Reader, HepMC2Writer, iter_hepmc2, write_hepmc2
from .writer import EventRecordWriter, record_to_string, write_record

__all__ = [
    "EventRecordWriter",
    "write_record",
    "record_to_string",
    "HepMC2Reader",
    "HepMC2Writer",
    "iter_hepmc2",
    "write_hepmc2",
]
