"""Reproducción de elecciones presidenciales con el Colegio Electoral recalculado."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence

from .allocation import hamilton_two_party
from .metrics import AT_LARGE_ELECTORS, StateMetrics

DEMOCRATS = "D"
REPUBLICANS = "R"
SPLIT_STATE_CODES = ("ME", "NE")


@dataclass(frozen=True)
class SplitStateResult:
    """Distritos ganados por los demócratas en un estado que reparte por distrito."""

    district_dem_wins: int
    district_count: int


@dataclass(frozen=True)
class HistoricalElection:
    year: int
    dem_winners: FrozenSet[str]
    split_states: Mapping[str, SplitStateResult] = field(default_factory=dict)


@dataclass(frozen=True)
class ElectionOutcome:
    year: int
    democrats: int
    republicans: int
    majority: int
    winner: Optional[str]


def _election(year: int, dem_winners: str, split_states: Dict[str, SplitStateResult]) -> HistoricalElection:
    return HistoricalElection(year=year, dem_winners=frozenset(dem_winners.split()), split_states=split_states)


HISTORICAL_ELECTIONS: Dict[int, HistoricalElection] = {
    2016: _election(
        2016,
        "CA CO CT DC DE HI IL MA MD ME MN NH NJ NM NV NY OR RI VA VT WA",
        {"ME": SplitStateResult(1, 2), "NE": SplitStateResult(0, 3)},
    ),
    2020: _election(
        2020,
        "AZ CA CO CT DC DE GA HI IL MA MD ME MI MN NH NJ NM NV NY OR PA RI VA VT WA WI",
        {"ME": SplitStateResult(1, 2), "NE": SplitStateResult(1, 3)},
    ),
    2024: _election(
        2024,
        "CA CO CT DC DE HI IL MA MD ME MN NH NJ NM NY OR RI VA VT WA",
        {"ME": SplitStateResult(1, 2), "NE": SplitStateResult(1, 3)},
    ),
}


def majority_threshold(total_electoral_votes: int) -> int:
    return total_electoral_votes // 2 + 1


def allocate_split_district_votes(district_votes: int, district_dem_wins: int, district_count: int) -> tuple[int, int]:
    """Reparte los electores de distrito según la fracción de distritos ganados."""

    if district_votes <= 0:
        return 0, 0
    if district_count <= 0:
        return 0, district_votes
    dem_share = min(1.0, max(0.0, district_dem_wins / district_count))
    allocation = hamilton_two_party(district_votes, dem_share)
    return allocation.party_a, allocation.party_b


def replay_election(election: HistoricalElection, metrics_by_state: Mapping[str, StateMetrics]) -> ElectionOutcome:
    """Suma los electores de cada partido para una elección histórica."""

    ec_total = sum(state.ec_votes for state in metrics_by_state.values())
    majority = majority_threshold(ec_total)
    democrats = republicans = 0

    for code, state in metrics_by_state.items():
        dem_won = code in election.dem_winners
        if code not in SPLIT_STATE_CODES and code not in election.split_states:
            if dem_won:
                democrats += state.ec_votes
            else:
                republicans += state.ec_votes
            continue

        at_large = min(AT_LARGE_ELECTORS, state.ec_votes)
        district_votes = max(0, state.ec_votes - AT_LARGE_ELECTORS)
        if dem_won:
            democrats += at_large
        else:
            republicans += at_large

        split = election.split_states.get(code)
        if split is not None:
            dem, rep = allocate_split_district_votes(district_votes, split.district_dem_wins, split.district_count)
            democrats += dem
            republicans += rep
        elif dem_won:
            democrats += district_votes
        else:
            republicans += district_votes

    return ElectionOutcome(
        year=election.year,
        democrats=democrats,
        republicans=republicans,
        majority=majority,
        winner=_winner(democrats, republicans, majority),
    )


def _winner(democrats: int, republicans: int, majority: int) -> Optional[str]:
    if democrats >= majority:
        return DEMOCRATS
    if republicans >= majority:
        return REPUBLICANS
    # Empate: ninguna mayoría, la elección pasaría a la Cámara.
    return None


def compute_historical_ec_outcomes(
    metrics_by_state: Mapping[str, StateMetrics], years: Sequence[int] | None = None
) -> List[ElectionOutcome]:
    selected = years if years is not None else sorted(HISTORICAL_ELECTIONS)
    return [replay_election(HISTORICAL_ELECTIONS[year], metrics_by_state) for year in selected]


__all__ = [
    "ElectionOutcome",
    "HISTORICAL_ELECTIONS",
    "HistoricalElection",
    "SplitStateResult",
    "allocate_split_district_votes",
    "compute_historical_ec_outcomes",
    "majority_threshold",
    "replay_election",
]
