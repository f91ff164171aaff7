"""Primitivas de reparto: resto mayor (Hamilton) y Sainte-Laguë."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple


@dataclass(frozen=True)
class PartyAllocation:
    """Reparto entre dos partidos."""

    party_a: int
    party_b: int

    @property
    def total(self) -> int:
        return self.party_a + self.party_b


def normalize_shares(shares: Mapping[str, float] | None, party_ids: Sequence[str]) -> Dict[str, float]:
    """Normaliza las cuotas para que sumen 1 siguiendo el orden de ``party_ids``.

    Valores negativos o ausentes cuentan como cero; si nada es positivo se
    reparte de forma pareja.
    """

    shares = shares or {}
    cleaned = {party_id: max(0.0, float(shares.get(party_id, 0.0) or 0.0)) for party_id in party_ids}
    total = sum(cleaned[party_id] for party_id in party_ids)
    if total <= 0:
        even = 1 / max(1, len(party_ids))
        return {party_id: even for party_id in party_ids}
    return {party_id: cleaned[party_id] / total for party_id in party_ids}


def hamilton_two_party(total_seats: int, share_a: float) -> PartyAllocation:
    """Reparte ``total_seats`` entre A y B por el método del resto mayor."""

    total_seats = max(0, int(total_seats))
    share_a = min(1.0, max(0.0, float(share_a)))
    seats = _largest_remainder(total_seats, [share_a, 1 - share_a])
    return PartyAllocation(party_a=seats[0], party_b=seats[1])


def hamilton_three_party(total_seats: int, share_a: float, share_b: float) -> Tuple[int, int, int]:
    """Reparto de resto mayor entre A, B y un tercer partido de base.

    La cuota de base es lo que A y B dejan libre. Si A + B supera 1 se
    reescalan proporcionalmente y la base queda en cero.
    """

    total_seats = max(0, int(total_seats))
    share_a = min(1.0, max(0.0, float(share_a)))
    share_b = min(1.0, max(0.0, float(share_b)))
    combined = share_a + share_b
    if combined > 1:
        share_a, share_b = share_a / combined, share_b / combined
    baseline = max(0.0, 1 - share_a - share_b)
    seats = _largest_remainder(total_seats, [share_a, share_b, baseline])
    return seats[0], seats[1], seats[2]


def sainte_lague_allocation(
    shares: Mapping[str, float], total_seats: int, party_ids: Sequence[str]
) -> Dict[str, int]:
    """Método de Sainte-Laguë por cociente mayor (divisores 1, 3, 5, ...).

    Los empates se resuelven a favor del identificador menor.
    """

    normalized = normalize_shares(shares, party_ids)
    seats = {party_id: 0 for party_id in party_ids}
    if not party_ids:
        return seats
    ordered = sorted(party_ids)
    for _ in range(max(0, int(total_seats))):
        winner = min(
            ordered,
            key=lambda party_id: (-normalized[party_id] / (2 * seats[party_id] + 1), party_id),
        )
        seats[winner] += 1
    return seats


def _largest_remainder(total_seats: int, shares: Sequence[float]) -> List[int]:
    raw = [total_seats * share for share in shares]
    seats = [math.floor(value) for value in raw]
    allocated = sum(seats)
    while allocated > total_seats:
        # Error de coma flotante: se descuenta a la entrada con menor resto.
        index = min(
            (i for i in range(len(seats)) if seats[i] > 0),
            key=lambda i: raw[i] - seats[i],
        )
        seats[index] -= 1
        allocated -= 1
    # sorted() es estable: a igual resto gana el orden fijo de las entradas.
    order = sorted(range(len(raw)), key=lambda index: -(raw[index] - seats[index]))
    index = 0
    while allocated < total_seats:
        seats[order[index % len(order)]] += 1
        allocated += 1
        index += 1
    return seats


__all__ = [
    "PartyAllocation",
    "hamilton_three_party",
    "hamilton_two_party",
    "normalize_shares",
    "sainte_lague_allocation",
]
