"""Construcción de planes de distritos plurinominales."""
from __future__ import annotations

import math
from typing import List, Optional

from loguru import logger

from .models import DistrictPlan, DistrictSpec
from .settings import PRSettings, clamp_pr_settings


def build_district_plan(state_code: str, total_seats: int, settings: PRSettings) -> DistrictPlan:
    """Divide los escaños no compensatorios de un estado en distritos."""

    safe = clamp_pr_settings(settings)
    seat_counts = choose_district_seat_counts(
        total_seats,
        safe.district_seat_target,
        safe.min_district_seats,
        safe.max_district_seats,
    )
    districts = tuple(
        DistrictSpec(district_id=f"{state_code}-{index}", seats=seats)
        for index, seats in enumerate(seat_counts, start=1)
    )
    return DistrictPlan(state_code=state_code, districts=districts)


def choose_district_seat_counts(total_seats: int, target: int, min_seats: int, max_seats: int) -> List[int]:
    """Busca la partición más pareja y cercana a ``target`` entre todas las cantidades factibles.

    Si ninguna cantidad de distritos cumple los límites se usa un único
    distrito con todos los escaños.
    """

    if total_seats <= 0:
        return []
    if total_seats < min_seats:
        return [total_seats]

    best: Optional[List[int]] = None
    best_score = math.inf
    min_count = math.ceil(total_seats / max_seats)
    max_count = max(min_count, total_seats // min_seats)

    for count in range(min_count, max_count + 1):
        parts = _balanced_parts(total_seats, count, min_seats, max_seats)
        if parts is None:
            continue
        score = _score_plan(parts, target)
        if score < best_score:
            best_score = score
            best = parts

    if best is None:
        logger.debug(
            "Sin partición factible para {} escaños en [{}, {}]; se usa un solo distrito",
            total_seats,
            min_seats,
            max_seats,
        )
        return [total_seats]
    return best


def _score_plan(parts: List[int], target: int) -> float:
    mean = sum(parts) / len(parts)
    variance = sum((value - mean) ** 2 for value in parts) / len(parts)
    target_penalty = sum(abs(value - target) for value in parts)
    return variance * 10 + target_penalty


def _balanced_parts(total: int, count: int, min_seats: int, max_seats: int) -> Optional[List[int]]:
    if count <= 0:
        return None
    if count * min_seats > total or count * max_seats < total:
        return None

    base = total // count
    remainder = total - base * count
    parts = [base] * count

    for index in range(count):
        if remainder <= 0:
            break
        if parts[index] < max_seats:
            parts[index] += 1
            remainder -= 1

    # Reparación local para respetar los límites.
    for index in reversed(range(count)):
        while parts[index] > max_seats:
            parts[index] -= 1
            remainder += 1

    for index in range(count):
        while parts[index] < min_seats and remainder > 0:
            parts[index] += 1
            remainder -= 1

    if remainder != 0:
        return None
    if any(value < min_seats or value > max_seats for value in parts):
        return None
    return sorted(parts, reverse=True)


__all__ = ["build_district_plan", "choose_district_seat_counts"]
