from __future__ import annotations

import pytest

from simulador_camara.metrics import StateMetrics
from simulador_camara.overlays import overlay_totals, seat_share_from_vote


def _entry(code: str, seats: int) -> StateMetrics:
    return StateMetrics(
        state=code,
        code=code,
        population=1_000_000,
        house_seats=seats,
        house_delta=0,
        ec_votes=seats + 2,
        ec_delta=0,
        ec_per_million=0.0,
    )


def test_responsiveness_curve():
    assert seat_share_from_vote(0.6, "medium") == pytest.approx(0.6)
    assert seat_share_from_vote(0.6, "low") == pytest.approx(0.56)
    assert seat_share_from_vote(0.6, "high") == pytest.approx(0.64)
    assert seat_share_from_vote(0.9, "high") == 1.0


def test_unknown_responsiveness():
    with pytest.raises(ValueError):
        seat_share_from_vote(0.5, "extreme")


def test_overlay_totals_skip_dc_and_default_to_even_split():
    metrics = [_entry("AA", 10), _entry("BB", 4), _entry("DC", 0)]
    totals = overlay_totals(metrics, {"AA": 0.7}, "high")
    assert (totals.party_a, totals.party_b) == (9, 5)
    assert totals.party_a + totals.party_b == 14
    assert totals.party_a_curve + totals.party_b_curve == 14
    assert totals.party_a_curve >= totals.party_a
