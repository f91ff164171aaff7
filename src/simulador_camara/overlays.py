"""Traducción ilustrativa de votos a escaños sobre la Cámara prorrateada."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from .allocation import hamilton_two_party
from .data_loader import DEFAULT_TWO_PARTY_SHARE
from .metrics import StateMetrics

RESPONSIVENESS_FACTORS = {"low": 0.6, "medium": 1.0, "high": 1.4}


@dataclass(frozen=True)
class OverlayTotals:
    party_a: int
    party_b: int
    party_a_curve: int
    party_b_curve: int


def seat_share_from_vote(vote_share: float, responsiveness: str = "medium") -> float:
    """Curva lineal alrededor de 0.5: ``low`` atenúa y ``high`` amplifica la ventaja."""

    if responsiveness not in RESPONSIVENESS_FACTORS:
        raise ValueError(f"Sensibilidad desconocida: {responsiveness}")
    adjusted = 0.5 + (vote_share - 0.5) * RESPONSIVENESS_FACTORS[responsiveness]
    return min(1.0, max(0.0, adjusted))


def overlay_totals(
    metrics: Iterable[StateMetrics],
    party_a_shares: Mapping[str, float],
    responsiveness: str = "medium",
) -> OverlayTotals:
    party_a = party_b = curve_a = curve_b = 0
    for entry in metrics:
        if entry.code == "DC":
            continue
        share = party_a_shares.get(entry.code, DEFAULT_TWO_PARTY_SHARE)
        direct = hamilton_two_party(entry.house_seats, share)
        curved = hamilton_two_party(entry.house_seats, seat_share_from_vote(share, responsiveness))
        party_a += direct.party_a
        party_b += direct.party_b
        curve_a += curved.party_a
        curve_b += curved.party_b
    return OverlayTotals(party_a=party_a, party_b=party_b, party_a_curve=curve_a, party_b_curve=curve_b)


__all__ = ["OverlayTotals", "RESPONSIVENESS_FACTORS", "overlay_totals", "seat_share_from_vote"]
