"""PDG helpers.

Particle identities are carried as scikit-hep ``particle.PDGID`` values,
which behave like plain integers but know how to describe themselves.
"""

from __future__ import annotations

from particle import PDGID, InvalidParticle, ParticleNotFound
from particle import Particle as _Particle


def to_pdgid(code: int) -> PDGID:
    return code if isinstance(code, PDGID) else PDGID(int(code))


def name(pdg_id: int) -> str:
    """Short particle name, falling back to the bare code."""
    try:
        return _Particle.from_pdgid(pdg_id).name
    except (ParticleNotFound, InvalidParticle):
        return str(int(pdg_id))
