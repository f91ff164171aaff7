"""Prorrateo de escaños por el método de Huntington-Hill (proporciones iguales)."""
from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

from loguru import logger

from .data_loader import StateRecord

MIN_HOUSE_SIZE = 435
MAX_HOUSE_SIZE = 1200
HOUSE_MODELS = ("manual", "cube_root", "proportional_500k", "wyoming_rule")


class InvalidConfigurationError(ValueError):
    """El total de escaños no alcanza para dar uno a cada estado."""


@dataclass(frozen=True)
class _PriorityEntry:
    """Entrada del heap: mayor prioridad primero y, a igual prioridad, el código mayor."""

    priority: float
    state: str

    def __lt__(self, other: "_PriorityEntry") -> bool:
        if self.priority == other.priority:
            return self.state > other.state
        return self.priority > other.priority


def compute_priority(population: float, seats: int) -> float:
    return population / math.sqrt(seats * (seats + 1))


def apportion(populations: Mapping[str, int], total_seats: int) -> Dict[str, int]:
    """Entrega los escaños por estado; la suma es exactamente ``total_seats``."""

    states = list(populations)
    remaining = total_seats - len(states)
    if remaining < 0:
        raise InvalidConfigurationError(
            f"El total de escaños ({total_seats}) debe ser al menos el número de estados ({len(states)})"
        )

    seats = {state: 1 for state in states}
    heap: List[_PriorityEntry] = [
        _PriorityEntry(priority=compute_priority(populations[state], 1), state=state)
        for state in states
    ]
    heapq.heapify(heap)

    for _ in range(remaining):
        entry = heapq.heappop(heap)
        seats[entry.state] += 1
        heapq.heappush(
            heap,
            _PriorityEntry(
                priority=compute_priority(populations[entry.state], seats[entry.state]),
                state=entry.state,
            ),
        )

    logger.debug("Prorrateo de {} escaños entre {} estados", total_seats, len(states))
    return seats


def clamp_house_size(value: float) -> int:
    return int(min(MAX_HOUSE_SIZE, max(MIN_HOUSE_SIZE, value)))


def house_size_by_model(model: str, records: Iterable[StateRecord], manual_seats: int = MIN_HOUSE_SIZE) -> int:
    """Tamaño de la Cámara según el modelo elegido, limitado a [435, 1200].

    - ``manual``: el valor indicado.
    - ``cube_root``: raíz cúbica de la población nacional.
    - ``proportional_500k``: un escaño cada 500 mil habitantes.
    - ``wyoming_rule``: población nacional dividida por la del estado más pequeño.
    """

    if model not in HOUSE_MODELS:
        raise ValueError(f"Modelo de Cámara desconocido: {model}")
    if model == "manual":
        return clamp_house_size(manual_seats)

    apportioned = [record for record in records if record.apportioned]
    national_population = sum(record.population for record in apportioned)

    if model == "cube_root":
        return clamp_house_size(_round_half_up(national_population ** (1 / 3)))
    if model == "proportional_500k":
        return clamp_house_size(_round_half_up(national_population / 500_000))

    smallest = min((record.population for record in apportioned), default=0)
    if smallest <= 0:
        return clamp_house_size(MIN_HOUSE_SIZE)
    return clamp_house_size(_round_half_up(national_population / smallest))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


__all__ = [
    "HOUSE_MODELS",
    "InvalidConfigurationError",
    "apportion",
    "clamp_house_size",
    "compute_priority",
    "house_size_by_model",
]
