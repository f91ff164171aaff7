"""Métricas de desproporcionalidad y métricas por estado."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Sequence

from .allocation import normalize_shares
from .data_loader import StateRecord

AT_LARGE_ELECTORS = 2
DC_ELECTORS = 3


def shares_from_seats(seats_by_party: Mapping[str, int], party_ids: Sequence[str]) -> Dict[str, float]:
    total = sum(seats_by_party.get(party_id, 0) for party_id in party_ids)
    if total <= 0:
        return normalize_shares({}, party_ids)
    return {party_id: seats_by_party.get(party_id, 0) / total for party_id in party_ids}


def gallagher_index(
    vote_shares: Mapping[str, float], seat_shares: Mapping[str, float], party_ids: Sequence[str]
) -> float:
    """Índice de mínimos cuadrados de Gallagher (0 = proporcionalidad perfecta)."""

    votes = normalize_shares(vote_shares, party_ids)
    seats = normalize_shares(seat_shares, party_ids)
    sum_squares = sum((seats[party_id] - votes[party_id]) ** 2 for party_id in party_ids)
    return math.sqrt(0.5 * sum_squares)


def wasted_votes_proxy(
    vote_shares: Mapping[str, float], seat_shares: Mapping[str, float], party_ids: Sequence[str]
) -> float:
    """Fracción del voto que no queda representada: ``1 - Σ min(voto, escaño)``."""

    votes = normalize_shares(vote_shares, party_ids)
    seats = normalize_shares(seat_shares, party_ids)
    represented = sum(min(votes[party_id], seats[party_id]) for party_id in party_ids)
    return 1 - represented


@dataclass(frozen=True)
class StateMetrics:
    state: str
    code: str
    population: int
    house_seats: int
    house_delta: int
    ec_votes: int
    ec_delta: int
    ec_per_million: float


def compute_ec_votes(code: str, house_seats: int) -> int:
    return DC_ELECTORS if code == "DC" else house_seats + AT_LARGE_ELECTORS


def build_state_metrics(
    record: StateRecord, seats_by_state: Mapping[str, int], baseline_seats: Mapping[str, int]
) -> StateMetrics:
    house_seats = seats_by_state.get(record.code, 0)
    baseline_house = baseline_seats.get(record.code, 0)
    ec_votes = compute_ec_votes(record.code, house_seats)
    baseline_ec = compute_ec_votes(record.code, baseline_house)
    ec_per_million = ec_votes / (record.population / 1_000_000) if record.population > 0 else 0.0
    return StateMetrics(
        state=record.name,
        code=record.code,
        population=record.population,
        house_seats=house_seats,
        house_delta=house_seats - baseline_house,
        ec_votes=ec_votes,
        ec_delta=ec_votes - baseline_ec,
        ec_per_million=ec_per_million,
    )


def build_state_metrics_table(
    records: Iterable[StateRecord], seats_by_state: Mapping[str, int], baseline_seats: Mapping[str, int]
) -> List[StateMetrics]:
    return [build_state_metrics(record, seats_by_state, baseline_seats) for record in records]


__all__ = [
    "StateMetrics",
    "build_state_metrics",
    "build_state_metrics_table",
    "compute_ec_votes",
    "gallagher_index",
    "shares_from_seats",
    "wasted_votes_proxy",
]
