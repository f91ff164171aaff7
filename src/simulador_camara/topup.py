"""Escaños compensatorios (modelo mixto) hacia el ideal de Sainte-Laguë."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Sequence

from .allocation import sainte_lague_allocation


@dataclass(frozen=True)
class TopUpResult:
    ideal_seats: Dict[str, int]
    top_up_seats_by_party: Dict[str, int]
    final_seats_by_party: Dict[str, int]


def allocate_top_up_seats(
    party_ids: Sequence[str],
    total_seats: int,
    top_up_seats: int,
    vote_shares: Mapping[str, float],
    district_seats_by_party: Mapping[str, int],
) -> TopUpResult:
    """Entrega los escaños compensatorios uno a uno al partido con mayor déficit.

    El déficit es ``ideal - distritos - compensatorios ya asignados``, con el
    ideal calculado por Sainte-Laguë sobre el total combinado. Empates por
    identificador ascendente.
    """

    ideal = sainte_lague_allocation(vote_shares, total_seats, party_ids)
    top_up = {party_id: 0 for party_id in party_ids}
    ordered = sorted(party_ids)

    for _ in range(max(0, top_up_seats) if party_ids else 0):
        winner = min(
            ordered,
            key=lambda party_id: (
                -(ideal[party_id] - district_seats_by_party.get(party_id, 0) - top_up[party_id]),
                party_id,
            ),
        )
        top_up[winner] += 1

    final = {
        party_id: district_seats_by_party.get(party_id, 0) + top_up[party_id]
        for party_id in party_ids
    }
    return TopUpResult(ideal_seats=ideal, top_up_seats_by_party=top_up, final_seats_by_party=final)


__all__ = ["TopUpResult", "allocate_top_up_seats"]
