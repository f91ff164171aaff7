from __future__ import annotations

import pytest

from simulador_camara.elections import (
    HISTORICAL_ELECTIONS,
    allocate_split_district_votes,
    compute_historical_ec_outcomes,
    majority_threshold,
    replay_election,
)
from simulador_camara.metrics import StateMetrics
from simulador_camara.simulation import compute_state_metrics
from simulador_camara.data_loader import load_states


def _metrics(**ec_votes: int) -> dict[str, StateMetrics]:
    return {
        code: StateMetrics(
            state=code,
            code=code,
            population=1_000_000,
            house_seats=max(0, votes - 2),
            house_delta=0,
            ec_votes=votes,
            ec_delta=0,
            ec_per_million=float(votes),
        )
        for code, votes in ec_votes.items()
    }


def test_majority_threshold():
    assert majority_threshold(538) == 270
    assert majority_threshold(539) == 270
    assert majority_threshold(20) == 11


def test_split_district_votes():
    assert allocate_split_district_votes(3, 1, 3) == (1, 2)
    assert allocate_split_district_votes(2, 1, 2) == (1, 1)
    assert allocate_split_district_votes(0, 1, 2) == (0, 0)
    assert allocate_split_district_votes(3, 1, 0) == (0, 3)


def test_replay_with_split_states():
    metrics = _metrics(CA=54, TX=40, ME=4, NE=5, DC=3)
    outcome = replay_election(HISTORICAL_ELECTIONS[2024], metrics)
    assert outcome.democrats == 61
    assert outcome.republicans == 45
    assert outcome.majority == 54
    assert outcome.winner == "D"


def test_split_state_without_district_wins():
    metrics = _metrics(CA=54, TX=40, ME=4, NE=5, DC=3)
    outcome = replay_election(HISTORICAL_ELECTIONS[2016], metrics)
    assert (outcome.democrats, outcome.republicans) == (60, 46)


def test_tie_has_no_winner():
    outcome = replay_election(HISTORICAL_ELECTIONS[2024], _metrics(CA=10, TX=10))
    assert outcome.winner is None


def test_republican_majority():
    outcome = replay_election(HISTORICAL_ELECTIONS[2020], _metrics(CA=10, TX=30))
    assert outcome.winner == "R"


@pytest.fixture(scope="module")
def metrics_435():
    return {entry.code: entry for entry in compute_state_metrics(load_states(), 435)}


def test_current_house_has_538_electors(metrics_435):
    assert sum(entry.ec_votes for entry in metrics_435.values()) == 538


def test_2024_replay_on_2020_apportionment(metrics_435):
    outcomes = {outcome.year: outcome for outcome in compute_historical_ec_outcomes(metrics_435)}
    assert sorted(outcomes) == [2016, 2020, 2024]
    assert outcomes[2024].democrats == 226
    assert outcomes[2024].republicans == 312
    assert outcomes[2024].winner == "R"
    assert outcomes[2020].winner == "D"
    for outcome in outcomes.values():
        assert outcome.majority == 270
        assert outcome.democrats + outcome.republicans == 538
