"""Particle set produced by one generation cycle."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from particlizer.domain.shapes import Point


@dataclass
class ParticleSet:
    """Ordered particle positions in canvas coordinates.

    Order is insertion order and carries no meaning. Edge-biased particles
    come first, followed by particles added by the per-shape fallback.

    Attributes:
        points: Particle positions
        edge_count: Particles accepted by edge-biased rejection sampling
        fallback_count: Particles added by uniform per-shape fallback
        attempts: Rejection sampling candidates drawn
    """

    points: list[Point] = field(default_factory=list)
    edge_count: int = 0
    fallback_count: int = 0
    attempts: int = 0

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def edge_points(self) -> list[Point]:
        """Particles placed by the edge-biased phase."""
        return self.points[: self.edge_count]

    @property
    def fallback_points(self) -> list[Point]:
        """Particles placed by the fallback phase."""
        return self.points[self.edge_count :]

    def to_dict(self) -> dict[str, Any]:
        return {
            "particles": [list(p.to_tuple()) for p in self.points],
            "edge_count": self.edge_count,
            "fallback_count": self.fallback_count,
            "attempts": self.attempts,
        }
