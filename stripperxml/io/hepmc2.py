from __future__ import annotations

import gzip
import io
import logging
import shlex
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, TextIO

from ..graph import EnergyUnit, GenEvent, GenParticle, GenVertex, LengthUnit

logger = logging.getLogger(__name__)

HEPMC_VERSION = "2.06.09"
_START = "HepMC::IO_GenEvent-START_EVENT_LISTING"
_END = "HepMC::IO_GenEvent-END_EVENT_LISTING"


def _open_text(path: str, mode: str = "r"):
    p = Path(path)
    if p.suffix == ".gz":
        return io.TextIOWrapper(gzip.open(p, mode + "b"), encoding="utf-8")
    return open(p, mode, encoding="utf-8")


# --- HepMC2 IO_GenEvent support ------------------------------------------------------
#
# Record types:
#   E <evtno> <mpi> <scale> <aqcd> <aqed> <procid> <spv> <nvtx> <beam1> <beam2> <nrand> [<rand>...] <nw> [<w>...]
#   N <n> "<name1>" ...                          (weight names)
#   U <mom_unit> <len_unit>
#   C <xs> <xs_err>
#   V <barcode> <id> <x> <y> <z> <t> <norphan> <nout> <nw> [<w>...]
#   P <barcode> <pdg> <px> <py> <pz> <e> <m> <status> <theta> <phi> <end_vtx> <nflow> [<code> <idx>...]
#
# After each V line come its orphan incoming particles, then its outgoing
# particles. Other record types (H, F) are skipped on read.


def _fmt(x: float) -> str:
    return f"{x:.17g}"


def _quote(name: str) -> str:
    # inverse of shlex.split inside double quotes
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _orphans(ev: GenEvent, v: GenVertex) -> list[GenParticle]:
    produced = {id(p) for vx in ev.vertices for p in vx.particles_out}
    return [p for p in v.particles_in if id(p) not in produced]


def write_event(ev: GenEvent, out: TextIO) -> None:
    """Write one event; particle barcodes of 0 are numbered on the fly."""
    weights = " ".join(_fmt(w) for w in ev.weights)
    out.write(
        f"E {ev.event_number} {ev.mpi} {_fmt(ev.scale)} {_fmt(ev.alpha_qcd)} {_fmt(ev.alpha_qed)} "
        f"{ev.signal_process_id} {ev.signal_process_vertex} {len(ev.vertices)} 0 0 0 "
        f"{len(ev.weights)}{' ' + weights if weights else ''}\n"
    )
    if ev.weight_names:
        names = " ".join(_quote(n) for n in ev.weight_names)
        out.write(f"N {len(ev.weight_names)} {names}\n")
    out.write(f"U {EnergyUnit(ev.energy_unit).value} {LengthUnit(ev.length_unit).value}\n")
    if ev.cross_section is not None:
        out.write(f"C {_fmt(ev.cross_section[0])} {_fmt(ev.cross_section[1])}\n")

    next_bc = 1
    for v in ev.vertices:
        orphans = _orphans(ev, v)
        vw = " ".join(_fmt(w) for w in v.weights)
        out.write(
            f"V {v.barcode} {v.status} {_fmt(v.x)} {_fmt(v.y)} {_fmt(v.z)} {_fmt(v.t)} "
            f"{len(orphans)} {len(v.particles_out)} {len(v.weights)}{' ' + vw if vw else ''}\n"
        )
        for p in (*orphans, *v.particles_out):
            bc = p.barcode if p.barcode else next_bc
            next_bc = max(next_bc, bc) + 1
            e, px, py, pz = p.momentum
            flows = "".join(f" {code} {idx}" for code, idx in sorted(p.flows.items()))
            out.write(
                f"P {bc} {p.pdg_id} {_fmt(px)} {_fmt(py)} {_fmt(pz)} {_fmt(e)} {_fmt(p.mass)} "
                f"{p.status} {_fmt(p.theta)} {_fmt(p.phi)} {p.end_vtx} {len(p.flows)}{flows}\n"
            )


def write_hepmc2(events: Iterable[GenEvent], out: TextIO) -> int:
    out.write(f"HepMC::Version {HEPMC_VERSION}\n")
    out.write(f"{_START}\n")
    n = 0
    for ev in events:
        write_event(ev, out)
        n += 1
    out.write(f"{_END}\n")
    logger.debug("wrote %d HepMC2 events", n)
    return n


def _parse_particle(parts: List[str]) -> GenParticle:
    nflow = int(parts[12])
    flow_tokens = parts[13:13 + 2 * nflow]
    flows = {int(flow_tokens[i]): int(flow_tokens[i + 1]) for i in range(0, len(flow_tokens), 2)}
    px, py, pz, e = (float(x) for x in parts[3:7])
    return GenParticle(
        barcode=int(parts[1]),
        pdg_id=int(parts[2]),
        momentum=(e, px, py, pz),
        mass=float(parts[7]),
        status=int(parts[8]),
        theta=float(parts[9]),
        phi=float(parts[10]),
        end_vtx=int(parts[11]),
        flows=flows,
    )


def _finish(ev: GenEvent) -> GenEvent:
    # Link produced particles to the vertex they end in
    by_bc: Dict[int, GenVertex] = {v.barcode: v for v in ev.vertices}
    for v in ev.vertices:
        for p in v.particles_out:
            target = by_bc.get(p.end_vtx) if p.end_vtx else None
            if target is not None and all(q is not p for q in target.particles_in):
                target.particles_in.append(p)
    return ev


def iter_hepmc2(stream: TextIO) -> Iterator[GenEvent]:
    """Iterate events from HepMC2 IO_GenEvent text."""
    current: Optional[GenEvent] = None
    vertex: Optional[GenVertex] = None
    n_orphans = 0
    mom_unit = EnergyUnit.GEV
    len_unit = LengthUnit.MM

    for raw in stream:
        line = raw.strip()
        if not line or line.startswith("HepMC::"):
            continue

        parts = line.split()
        tag = parts[0]

        if tag == "E":
            if current is not None:
                yield _finish(current)
            nrand = int(parts[11])
            idx = 12 + nrand
            nw = int(parts[idx])
            current = GenEvent(
                event_number=int(parts[1]),
                mpi=int(parts[2]),
                scale=float(parts[3]),
                alpha_qcd=float(parts[4]),
                alpha_qed=float(parts[5]),
                signal_process_id=int(parts[6]),
                signal_process_vertex=int(parts[7]),
                weights=[float(w) for w in parts[idx + 1:idx + 1 + nw]],
                energy_unit=mom_unit,
                length_unit=len_unit,
            )
            vertex = None
            continue

        if current is None:
            # Skip stray records before first event
            continue

        if tag == "N":
            current.weight_names = shlex.split(line)[2:]
        elif tag == "U":
            mom_unit, len_unit = EnergyUnit(parts[1]), LengthUnit(parts[2])
            current.energy_unit, current.length_unit = mom_unit, len_unit
        elif tag == "C":
            current.cross_section = (float(parts[1]), float(parts[2]))
        elif tag == "V":
            nw = int(parts[9])
            vertex = GenVertex(
                barcode=int(parts[1]),
                status=int(parts[2]),
                x=float(parts[3]),
                y=float(parts[4]),
                z=float(parts[5]),
                t=float(parts[6]),
                weights=[float(w) for w in parts[10:10 + nw]],
            )
            n_orphans = int(parts[7])
            current.vertices.append(vertex)
        elif tag == "P":
            if vertex is None:
                raise ValueError(f"particle record before any vertex: {line}")
            p = _parse_particle(parts)
            if n_orphans > 0:
                vertex.particles_in.append(p)
                n_orphans -= 1
            else:
                vertex.particles_out.append(p)
        else:
            logger.debug("skipping HepMC2 record %s", tag)

    if current is not None:
        yield _finish(current)


class HepMC2Reader:
    def iter_events(self, path: str) -> Iterator[GenEvent]:
        with _open_text(path) as f:
            yield from iter_hepmc2(f)

    def read(self, path: str) -> list[GenEvent]:
        return list(self.iter_events(path))


class HepMC2Writer:
    def write(self, path: str, events: Iterable[GenEvent]) -> int:
        with _open_text(path, "w") as f:
            return write_hepmc2(events, f)
