"""Generación determinista de papeletas preferenciales."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple, TypeVar

from .allocation import normalize_shares

T = TypeVar("T")

_MASK_32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5


@dataclass(frozen=True)
class Candidate:
    id: str
    party_id: str


@dataclass(frozen=True)
class RankedBallot:
    """Papeleta que ordena a todos los candidatos exactamente una vez."""

    ranking: Tuple[str, ...]
    weight: float = 1.0


class SeededRng:
    """Flujo pseudoaleatorio de 32 bits: la misma semilla produce la misma secuencia."""

    def __init__(self, seed: int):
        self.state = int(seed) & _MASK_32

    def next_float(self) -> float:
        """Siguiente valor en [0, 1)."""
        self.state = (self.state + _INCREMENT) & _MASK_32
        t = self.state
        x = _imul(t ^ (t >> 15), 1 | t)
        x ^= (x + _imul(x ^ (x >> 7), 61 | x)) & _MASK_32
        return ((x ^ (x >> 14)) & _MASK_32) / 4294967296

    __call__ = next_float


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK_32


def build_candidate_slate(party_ids: Sequence[str], seats: int) -> List[Candidate]:
    """``seats + 1`` candidatos por partido, con identificadores ``{partido}-{n}``."""

    per_party = max(1, seats + 1)
    return [
        Candidate(id=f"{party_id}-{number}", party_id=party_id)
        for party_id in party_ids
        for number in range(1, per_party + 1)
    ]


def generate_ranked_ballots(
    party_shares: Mapping[str, float],
    party_ids: Sequence[str],
    seats: int,
    ballot_count: int,
    seed: int,
) -> Tuple[List[RankedBallot], List[Candidate]]:
    """Sintetiza ``ballot_count`` papeletas completas.

    El primer partido de cada papeleta se sortea según las cuotas; el resto
    de los partidos y los candidatos dentro de cada partido se barajan con el
    mismo flujo pseudoaleatorio.
    """

    normalized = normalize_shares(party_shares, party_ids)
    candidates = build_candidate_slate(party_ids, seats)
    by_party: Dict[str, List[Candidate]] = {party_id: [] for party_id in party_ids}
    for candidate in candidates:
        by_party[candidate.party_id].append(candidate)

    rng = SeededRng(seed)
    ballots: List[RankedBallot] = []
    for _ in range(max(0, ballot_count)):
        first_party = _choose_weighted(normalized, party_ids, rng)
        remaining = _shuffle([party_id for party_id in party_ids if party_id != first_party], rng)
        ranking: List[str] = []
        for party_id in [first_party, *remaining]:
            ranking.extend(candidate.id for candidate in _shuffle(by_party[party_id], rng))
        ballots.append(RankedBallot(ranking=tuple(ranking)))

    return ballots, candidates


def _choose_weighted(weights: Mapping[str, float], party_ids: Sequence[str], rng: SeededRng) -> str:
    roll = rng.next_float()
    cumulative = 0.0
    for party_id in party_ids:
        cumulative += weights[party_id]
        if roll < cumulative:
            return party_id
    # Redondeo: la suma acumulada puede quedar apenas bajo 1.
    positive = [party_id for party_id in party_ids if weights[party_id] > 0]
    return (positive or list(party_ids))[-1]


def _shuffle(values: Sequence[T], rng: SeededRng) -> List[T]:
    out = list(values)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng.next_float() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


__all__ = [
    "Candidate",
    "RankedBallot",
    "SeededRng",
    "build_candidate_slate",
    "generate_ranked_ballots",
]
