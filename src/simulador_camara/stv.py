"""Recuento por voto único transferible (STV) con cuota Droop."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .ballots import Candidate, RankedBallot


@dataclass(frozen=True)
class STVResult:
    elected_candidate_ids: Tuple[str, ...]
    seats_by_party: Dict[str, int]
    quota: int


@dataclass
class _CountingBallot:
    """Papeleta en recuento: posición actual en el ranking y peso vigente."""

    ranking: Tuple[str, ...]
    weight: float
    index: int = 0

    def active_choice(self, active: Set[str]) -> Optional[str]:
        while self.index < len(self.ranking):
            candidate_id = self.ranking[self.index]
            if candidate_id in active:
                return candidate_id
            self.index += 1
        return None


@dataclass
class _CountState:
    seats: int
    quota: int
    active: Set[str]
    ballots: List[_CountingBallot]
    elected: List[str] = field(default_factory=list)

    @property
    def open_seats(self) -> int:
        return self.seats - len(self.elected)


def droop_quota(valid_votes: float, seats: int) -> int:
    return math.floor(valid_votes / (seats + 1)) + 1


def run_stv(seats: int, candidates: Sequence[Candidate], ballots: Iterable[RankedBallot]) -> STVResult:
    """Cuenta las papeletas y elige ``seats`` candidatos.

    Cada ronda elige a todos los que alcanzan la cuota (transfiriendo su
    excedente) o, si nadie la alcanza, elimina al de menor votación. Los
    empates se resuelven por identificador ascendente. Las papeletas
    recibidas no se modifican.
    """

    counting = [_CountingBallot(ranking=tuple(ballot.ranking), weight=ballot.weight) for ballot in ballots]
    valid_votes = sum(ballot.weight for ballot in counting)
    state = _CountState(
        seats=max(0, seats),
        quota=droop_quota(valid_votes, max(0, seats)),
        active={candidate.id for candidate in candidates},
        ballots=counting,
    )

    while state.open_seats > 0 and state.active:
        if len(state.active) <= state.open_seats:
            state.elected.extend(sorted(state.active))
            state.active.clear()
            break

        totals = _tally(state)
        winners = sorted(
            ((candidate_id, votes) for candidate_id, votes in totals.items() if votes >= state.quota),
            key=lambda item: (-item[1], item[0]),
        )
        if winners:
            for winner_id, winner_votes in winners:
                if winner_id not in state.active or state.open_seats <= 0:
                    continue
                state.elected.append(winner_id)
                _transfer_surplus(state, winner_id, winner_votes)
                state.active.discard(winner_id)
            continue

        eliminated = min(totals.items(), key=lambda item: (item[1], item[0]))[0]
        state.active.discard(eliminated)

    elected = tuple(state.elected[: state.seats])
    elected_set = set(elected)
    seats_by_party: Dict[str, int] = {}
    for candidate in candidates:
        seats_by_party.setdefault(candidate.party_id, 0)
        if candidate.id in elected_set:
            seats_by_party[candidate.party_id] += 1

    return STVResult(elected_candidate_ids=elected, seats_by_party=seats_by_party, quota=state.quota)


def _tally(state: _CountState) -> Dict[str, float]:
    totals = {candidate_id: 0.0 for candidate_id in sorted(state.active)}
    for ballot in state.ballots:
        candidate_id = ballot.active_choice(state.active)
        if candidate_id is not None:
            totals[candidate_id] += ballot.weight
    return totals


def _transfer_surplus(state: _CountState, winner_id: str, winner_votes: float) -> None:
    surplus = winner_votes - state.quota
    if surplus <= 0 or winner_votes <= 0:
        # Sin excedente las papeletas siguen con peso completo.
        return
    ratio = surplus / winner_votes
    for ballot in state.ballots:
        if ballot.active_choice(state.active) != winner_id:
            continue
        ballot.weight *= ratio
        ballot.index += 1


__all__ = ["STVResult", "droop_quota", "run_stv"]
