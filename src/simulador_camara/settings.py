"""Configuración de la simulación proporcional y sus límites."""
from __future__ import annotations

from dataclasses import dataclass, replace

MIN_DISTRICT_SEATS_RANGE = (1, 10)
MAX_DISTRICT_SEATS_CAP = 12
MAX_TOP_UP_SHARE = 0.3
MIN_BALLOTS_PER_SEAT = 100


@dataclass(frozen=True)
class PRSettings:
    district_seat_target: int = 5
    min_district_seats: int = 3
    max_district_seats: int = 7
    use_top_up: bool = True
    top_up_seat_share: float = 0.1
    stv_ballots_per_seat: int = 2000
    random_seed: int = 2026


DEFAULT_PR_SETTINGS = PRSettings()


def clamp_pr_settings(settings: PRSettings) -> PRSettings:
    """Limita cada parámetro a su rango válido de forma independiente."""

    low, high = MIN_DISTRICT_SEATS_RANGE
    min_seats = max(low, min(high, int(settings.min_district_seats)))
    max_seats = max(min_seats, min(MAX_DISTRICT_SEATS_CAP, int(settings.max_district_seats)))
    target = max(min_seats, min(max_seats, int(settings.district_seat_target)))

    return replace(
        settings,
        min_district_seats=min_seats,
        max_district_seats=max_seats,
        district_seat_target=target,
        use_top_up=bool(settings.use_top_up),
        top_up_seat_share=max(0.0, min(MAX_TOP_UP_SHARE, float(settings.top_up_seat_share))),
        stv_ballots_per_seat=max(MIN_BALLOTS_PER_SEAT, round(settings.stv_ballots_per_seat)),
        random_seed=int(settings.random_seed),
    )


__all__ = ["DEFAULT_PR_SETTINGS", "PRSettings", "clamp_pr_settings"]
