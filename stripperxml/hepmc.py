"""Conversion between sub-events and HepMC-style event graphs.

A sub-event becomes a graph with a single auxiliary vertex: the incoming
particles enter it and the outgoing particles leave it. Going back, every
vertex is scanned and only incoming beams and stable final-state particles
are kept. Factorisation scale and reweighting entries have no counterpart
in the graph and are lost on the way back.
"""

from __future__ import annotations

import logging
import math

from .codec import Id, Momentum, Status
from .errors import UnsupportedStatusError
from .graph import STATUS_FINAL, STATUS_INCOMING, EnergyUnit, GenEvent, GenParticle, GenVertex, LengthUnit
from .models import Particle, SubEvent
from .pdg import to_pdgid

logger = logging.getLogger(__name__)

HEPMC_INCOMING_STATUS = STATUS_INCOMING
HEPMC_OUTGOING_STATUS = STATUS_FINAL

# Barcode of the auxiliary vertex; negative since it is not a physical vertex
VTX_ID = -1

_TO_HEPMC = {
    Status.INCOMING: HEPMC_INCOMING_STATUS,
    Status.OUTGOING: HEPMC_OUTGOING_STATUS,
}
_FROM_HEPMC = {v: k for k, v in _TO_HEPMC.items()}


def pt(p) -> float:
    return math.sqrt(p[1] * p[1] + p[2] * p[2])


def theta(p) -> float:
    return math.atan2(pt(p), p[3])


def phi(p) -> float:
    # HepMC2 convention: atan2(px, py), not atan2(py, px)
    return math.atan2(p[1], p[2])


def particle_to_graph(particle: Particle) -> GenParticle:
    p = tuple(particle.momentum)
    return GenParticle(
        pdg_id=int(particle.id.pdg_id),
        momentum=p,
        status=_TO_HEPMC[particle.id.status],
        theta=theta(p),
        phi=phi(p),
    )


def particle_from_graph(p: GenParticle) -> Particle:
    status = _FROM_HEPMC.get(p.status)
    if status is None:
        raise UnsupportedStatusError(p.status, "can only convert incoming or outgoing particles")
    return Particle(
        id=Id(status, to_pdgid(p.pdg_id)),
        momentum=Momentum(*p.momentum),
    )


def subevent_to_graph(subevent: SubEvent) -> GenEvent:
    incoming = [particle_to_graph(p) for p in subevent.incoming_particles]
    for gp in incoming:
        gp.end_vtx = VTX_ID
    outgoing = [particle_to_graph(p) for p in subevent.outgoing_particles]
    vertex = GenVertex(barcode=VTX_ID, particles_in=incoming, particles_out=outgoing)
    return GenEvent(
        scale=subevent.mu_r,
        vertices=[vertex],
        weights=[subevent.weight],
        energy_unit=EnergyUnit.GEV,
        length_unit=LengthUnit.MM,
    )


def graph_to_subevent(event: GenEvent, *, strict: bool = False) -> SubEvent:
    """Collect incoming beams and final-state particles of ``event``.

    Particles with any other status are skipped. With ``strict=True`` a
    status other than incoming (4) or final (1) raises
    :class:`~stripperxml.errors.UnsupportedStatusError` instead.
    """
    particles: list[Particle] = []
    skipped = 0
    for vx in event.vertices:
        for wanted, plist in ((HEPMC_INCOMING_STATUS, vx.particles_in), (HEPMC_OUTGOING_STATUS, vx.particles_out)):
            for p in plist:
                if p.status == wanted:
                    particles.append(particle_from_graph(p))
                    continue
                if strict and p.status not in _FROM_HEPMC:
                    raise UnsupportedStatusError(p.status, f"particle in vertex {vx.barcode}")
                skipped += 1
    if skipped:
        logger.debug("skipped %d particles of event %d while converting to a sub-event", skipped, event.event_number)
    return SubEvent(
        weight=event.weight,
        mu_r=event.scale,
        particles=particles,
    )
