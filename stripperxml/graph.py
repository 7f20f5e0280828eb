"""
HepMC-style event graph.

Events are stored as vertices joined by particles. A particle listed in a
vertex's ``particles_in`` ends there (its ``end_vtx`` carries the vertex
barcode); a particle in ``particles_out`` is produced there. Vertex
barcodes are negative by convention.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

# HepMC status codes
STATUS_FINAL = 1
STATUS_INCOMING = 4


class EnergyUnit(str, Enum):
    MEV = "MEV"
    GEV = "GEV"


class LengthUnit(str, Enum):
    MM = "MM"
    CM = "CM"


@dataclass
class GenParticle:
    """A particle of the event graph.

    Attributes:
        pdg_id: PDG Monte Carlo particle ID.
        momentum: Four-momentum ``(E, px, py, pz)``.
        mass: Generated mass.
        status: HepMC status code (1 = final state, 4 = incoming beam, ...).
        theta: Polar angle of the momentum.
        phi: Azimuthal angle of the momentum.
        end_vtx: Barcode of the vertex the particle ends in, 0 if none.
        barcode: Unique particle identifier; 0 lets writers assign one.
        flows: Colour flow codes, ``{code: index}``.
    """

    pdg_id: int
    momentum: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    mass: float = 0.0
    status: int = 0
    theta: float = 0.0
    phi: float = 0.0
    end_vtx: int = 0
    barcode: int = 0
    flows: dict[int, int] = field(default_factory=dict)


@dataclass
class GenVertex:
    """A vertex in the event graph.

    Attributes:
        barcode: Unique vertex identifier (negative integer by convention).
        status: Vertex status/id code.
        x, y, z, t: Spacetime position of the vertex.
        weights: Optional vertex weights.
        particles_in: Particles ending at this vertex.
        particles_out: Particles produced at this vertex.
    """

    barcode: int = 0
    status: int = 0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    t: float = 0.0
    weights: list[float] = field(default_factory=list)
    particles_in: list[GenParticle] = field(default_factory=list)
    particles_out: list[GenParticle] = field(default_factory=list)


@dataclass
class GenEvent:
    """A single event of the graph representation.

    Attributes:
        event_number: Sequential event number.
        mpi: Number of multi-parton interactions.
        scale: Event scale in ``energy_unit``.
        alpha_qcd, alpha_qed: Couplings at the event scale.
        signal_process_id: Process identifier.
        signal_process_vertex: Barcode of the signal vertex, 0 if unset.
        weights: Event weights, the first is the main weight.
        weight_names: Optional names matching ``weights``.
        vertices: Vertices of the graph.
        energy_unit, length_unit: Units of momenta and positions.
        cross_section: Optional ``(value, error)`` in pb.
    """

    event_number: int = 0
    mpi: int = 0
    scale: float = 0.0
    alpha_qcd: float = 0.0
    alpha_qed: float = 0.0
    signal_process_id: int = 0
    signal_process_vertex: int = 0
    weights: list[float] = field(default_factory=list)
    weight_names: list[str] = field(default_factory=list)
    vertices: list[GenVertex] = field(default_factory=list)
    energy_unit: EnergyUnit = EnergyUnit.GEV
    length_unit: LengthUnit = LengthUnit.MM
    cross_section: Optional[tuple[float, float]] = None

    @property
    def weight(self) -> float:
        return self.weights[0] if self.weights else 0.0
