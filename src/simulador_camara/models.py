"""Tipos de valor del motor de representación proporcional."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Party:
    id: str
    name: str
    color: Optional[str] = None


@dataclass(frozen=True)
class StateVotes:
    """Cuotas de voto estatales por partido."""

    state_code: str
    party_shares: Mapping[str, float]


@dataclass(frozen=True)
class DistrictSpec:
    """Distrito con su número de escaños y, opcionalmente, cuotas locales propias."""

    district_id: str
    seats: int
    party_shares: Optional[Mapping[str, float]] = None


@dataclass(frozen=True)
class DistrictPlan:
    state_code: str
    districts: Tuple[DistrictSpec, ...] = ()

    @property
    def total_seats(self) -> int:
        return sum(district.seats for district in self.districts)


@dataclass(frozen=True)
class StatePRResult:
    """Resultado completo de un estado: distritos, compensación y métricas."""

    state_code: str
    total_seats: int
    district_seats: int
    top_up_seats: int
    vote_shares: Dict[str, float]
    district_seats_by_party: Dict[str, int]
    final_seats_by_party: Dict[str, int]
    gallagher: float
    wasted_votes_proxy: float
    district_plan: DistrictPlan


@dataclass(frozen=True)
class NationalPRResult:
    total_seats_by_party: Dict[str, int] = field(default_factory=dict)
    total_votes_by_party: Dict[str, float] = field(default_factory=dict)
    gallagher: float = 0.0
    wasted_votes_proxy: float = 0.0


DEFAULT_PARTIES: Tuple[Party, ...] = (
    Party(id="dem", name="Demócratas", color="#3b82f6"),
    Party(id="rep", name="Republicanos", color="#ef4444"),
    Party(id="ind", name="Independientes", color="#64748b"),
)


__all__ = [
    "DEFAULT_PARTIES",
    "DistrictPlan",
    "DistrictSpec",
    "NationalPRResult",
    "Party",
    "StatePRResult",
    "StateVotes",
]
