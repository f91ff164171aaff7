"""Orquestación de la simulación y CLI para explorar el tamaño de la Cámara."""
from __future__ import annotations

import argparse
import math
import sys
from collections import Counter
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from loguru import logger

from .allocation import normalize_shares
from .apportionment import HOUSE_MODELS, MIN_HOUSE_SIZE, apportion, house_size_by_model
from .ballots import SeededRng, generate_ranked_ballots
from .cache import ResultCache
from .data_loader import (
    DEFAULT_TWO_PARTY_SHARE,
    StateRecord,
    load_states,
    load_vote_shares,
    populations_by_state,
)
from .district_plan import build_district_plan
from .elections import ElectionOutcome, compute_historical_ec_outcomes
from .log import setup_logging
from .metrics import (
    StateMetrics,
    build_state_metrics_table,
    gallagher_index,
    shares_from_seats,
    wasted_votes_proxy,
)
from .models import DEFAULT_PARTIES, DistrictPlan, NationalPRResult, Party, StatePRResult, StateVotes
from .overlays import RESPONSIVENESS_FACTORS, overlay_totals
from .settings import DEFAULT_PR_SETTINGS, PRSettings, clamp_pr_settings
from .stv import run_stv
from .topup import allocate_top_up_seats

MIN_BALLOTS_PER_DISTRICT = 100
DISTRICT_SEED_RANGE = 1_000_000_000


def state_seed(random_seed: int, state_code: str) -> int:
    """Semilla por estado: semilla base más la suma de los códigos de carácter."""
    return random_seed + sum(ord(char) for char in state_code)


def run_hybrid_pr_by_state(
    parties: Sequence[Party],
    states: Iterable[StateVotes],
    state_seats: Mapping[str, int],
    settings: PRSettings = DEFAULT_PR_SETTINGS,
    district_overrides: Optional[Mapping[str, DistrictPlan]] = None,
    cache: Optional[ResultCache] = None,
) -> List[StatePRResult]:
    """Simula el sistema mixto (STV por distrito + compensación) estado por estado.

    Entradas idénticas se resuelven desde ``cache``; sin caché se usa una
    local a esta llamada.
    """

    safe = clamp_pr_settings(settings)
    party_ids = [party.id for party in parties]
    cache = cache if cache is not None else ResultCache()
    overrides = district_overrides or {}

    results: List[StatePRResult] = []
    for state_votes in states:
        state_code = state_votes.state_code
        total_seats = max(0, state_seats.get(state_code, 0))
        vote_shares = normalize_shares(state_votes.party_shares, party_ids)
        top_up_seats = (
            min(total_seats, math.floor(total_seats * safe.top_up_seat_share + 0.5)) if safe.use_top_up else 0
        )
        district_seat_total = max(0, total_seats - top_up_seats)
        district_plan = overrides.get(state_code) or build_district_plan(state_code, district_seat_total, safe)

        key = ResultCache.key_for(state_code, total_seats, vote_shares, safe, district_plan, party_ids)
        cached = cache.get(key)
        if cached is not None:
            results.append(cached)
            continue

        result = _simulate_state(
            state_code, total_seats, top_up_seats, district_seat_total, vote_shares, district_plan, safe, party_ids
        )
        cache.set(key, result)
        results.append(result)
    return results


def _simulate_state(
    state_code: str,
    total_seats: int,
    top_up_seats: int,
    district_seat_total: int,
    vote_shares: Dict[str, float],
    district_plan: DistrictPlan,
    settings: PRSettings,
    party_ids: Sequence[str],
) -> StatePRResult:
    district_seats_by_party: Counter[str] = Counter({party_id: 0 for party_id in party_ids})
    district_rng = SeededRng(state_seed(settings.random_seed, state_code))

    for district in district_plan.districts:
        seats = max(1, district.seats)
        shares = normalize_shares(
            district.party_shares if district.party_shares is not None else vote_shares, party_ids
        )
        ballot_count = max(MIN_BALLOTS_PER_DISTRICT, settings.stv_ballots_per_seat * seats)
        ballot_seed = math.floor(district_rng.next_float() * DISTRICT_SEED_RANGE)
        ballots, candidates = generate_ranked_ballots(
            party_shares=shares,
            party_ids=party_ids,
            seats=seats,
            ballot_count=ballot_count,
            seed=ballot_seed,
        )
        outcome = run_stv(seats, candidates, ballots)
        district_seats_by_party.update(outcome.seats_by_party)
        logger.debug(
            "{}: {} escaños, cuota {}, electos {}",
            district.district_id,
            seats,
            outcome.quota,
            ", ".join(outcome.elected_candidate_ids),
        )

    district_result = {party_id: district_seats_by_party.get(party_id, 0) for party_id in party_ids}
    final_seats = dict(district_result)
    if settings.use_top_up and top_up_seats > 0:
        top_up = allocate_top_up_seats(
            party_ids=party_ids,
            total_seats=total_seats,
            top_up_seats=top_up_seats,
            vote_shares=vote_shares,
            district_seats_by_party=district_result,
        )
        final_seats = top_up.final_seats_by_party

    seat_shares = shares_from_seats(final_seats, party_ids)
    return StatePRResult(
        state_code=state_code,
        total_seats=total_seats,
        district_seats=district_seat_total,
        top_up_seats=top_up_seats,
        vote_shares=vote_shares,
        district_seats_by_party=district_result,
        final_seats_by_party=final_seats,
        gallagher=gallagher_index(vote_shares, seat_shares, party_ids),
        wasted_votes_proxy=wasted_votes_proxy(vote_shares, seat_shares, party_ids),
        district_plan=district_plan,
    )


def summarize_national_pr(results: Iterable[StatePRResult], parties: Sequence[Party]) -> NationalPRResult:
    """Agrega los resultados estatales; el voto nacional se pondera por escaños."""

    party_ids = [party.id for party in parties]
    seats_by_party = {party_id: 0 for party_id in party_ids}
    votes_by_party = {party_id: 0.0 for party_id in party_ids}
    total_seats = 0

    for state in results:
        total_seats += state.total_seats
        for party_id in party_ids:
            seats_by_party[party_id] += state.final_seats_by_party.get(party_id, 0)
            votes_by_party[party_id] += state.vote_shares.get(party_id, 0.0) * state.total_seats

    if total_seats > 0:
        votes_by_party = {party_id: votes / total_seats for party_id, votes in votes_by_party.items()}

    seat_shares = shares_from_seats(seats_by_party, party_ids)
    return NationalPRResult(
        total_seats_by_party=seats_by_party,
        total_votes_by_party=votes_by_party,
        gallagher=gallagher_index(votes_by_party, seat_shares, party_ids),
        wasted_votes_proxy=wasted_votes_proxy(votes_by_party, seat_shares, party_ids),
    )


def state_votes_from_two_party(
    two_party_shares: Mapping[str, float], codes: Iterable[str], party_ids: Sequence[str]
) -> List[StateVotes]:
    """Convierte la cuota del primer partido en cuotas para el motor proporcional.

    El segundo partido recibe el complemento y los demás parten en cero.
    Un estado sin dato recibe el reparto parejo.
    """

    votes: List[StateVotes] = []
    for code in codes:
        share = two_party_shares.get(code, DEFAULT_TWO_PARTY_SHARE)
        shares = {party_id: 0.0 for party_id in party_ids}
        if len(party_ids) >= 2:
            shares[party_ids[0]] = share
            shares[party_ids[1]] = 1 - share
        votes.append(StateVotes(state_code=code, party_shares=shares))
    return votes


def compute_state_metrics(records: Sequence[StateRecord], total_seats: int) -> List[StateMetrics]:
    """Métricas por estado para ``total_seats`` frente a la Cámara actual de 435."""

    populations = populations_by_state(records)
    baseline = apportion(populations, MIN_HOUSE_SIZE)
    seats = apportion(populations, total_seats)
    return build_state_metrics_table(records, seats, baseline)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Simula cómo cambian los escaños por estado, el Colegio Electoral y los "
            "resultados proporcionales al modificar el tamaño de la Cámara."
        )
    )
    parser.add_argument("--seats", type=int, default=MIN_HOUSE_SIZE, help="Tamaño de la Cámara (modelo manual)")
    parser.add_argument("--model", choices=HOUSE_MODELS, default="manual", help="Modelo de tamaño de la Cámara")
    parser.add_argument("--populations", type=Path, default=None, help="CSV alternativo de población")
    parser.add_argument("--votes", type=Path, default=None, help="CSV o Excel con columnas code,share")
    parser.add_argument(
        "--responsiveness",
        choices=tuple(RESPONSIVENESS_FACTORS),
        default="medium",
        help="Sensibilidad de la curva votos-escaños",
    )
    parser.add_argument("--pr", action="store_true", help="Corre la simulación proporcional (STV + compensación)")
    parser.add_argument("--states", nargs="*", default=None, help="Códigos de estado para la simulación proporcional")
    parser.add_argument("--target", type=int, default=DEFAULT_PR_SETTINGS.district_seat_target)
    parser.add_argument("--min-district", type=int, default=DEFAULT_PR_SETTINGS.min_district_seats)
    parser.add_argument("--max-district", type=int, default=DEFAULT_PR_SETTINGS.max_district_seats)
    parser.add_argument("--no-top-up", action="store_true", help="Desactiva los escaños compensatorios")
    parser.add_argument("--top-up-share", type=float, default=DEFAULT_PR_SETTINGS.top_up_seat_share)
    parser.add_argument("--ballots-per-seat", type=int, default=DEFAULT_PR_SETTINGS.stv_ballots_per_seat)
    parser.add_argument("--seed", type=int, default=DEFAULT_PR_SETTINGS.random_seed)
    parser.add_argument(
        "--print-all",
        action="store_true",
        help="Muestra todos los estados; por defecto solo los que cambian respecto de 435.",
    )
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        records = load_states(args.populations)
        total_seats = house_size_by_model(args.model, records, args.seats)
        metrics = compute_state_metrics(records, total_seats)
        two_party = load_vote_shares(args.votes, records) if args.votes else {}
    except (FileNotFoundError, ValueError) as exc:
        print(f"No fue posible preparar la simulación: {exc}", file=sys.stderr)
        return 1

    _print_house(metrics, total_seats, args.print_all)
    metrics_by_state = {entry.code: entry for entry in metrics}
    _print_outcomes(compute_historical_ec_outcomes(metrics_by_state))

    if two_party:
        totals = overlay_totals(metrics, two_party, args.responsiveness)
        print("\n=== Traducción votos-escaños (resto mayor) ===")
        print(f"   Directa: A {totals.party_a} - B {totals.party_b}")
        print(f"   Curva ({args.responsiveness}): A {totals.party_a_curve} - B {totals.party_b_curve}")

    if args.pr:
        settings = replace(
            DEFAULT_PR_SETTINGS,
            district_seat_target=args.target,
            min_district_seats=args.min_district,
            max_district_seats=args.max_district,
            use_top_up=not args.no_top_up,
            top_up_seat_share=args.top_up_share,
            stv_ballots_per_seat=args.ballots_per_seat,
            random_seed=args.seed,
        )
        codes = [entry.code for entry in metrics if entry.code != "DC"]
        if args.states:
            wanted = {code.strip().upper() for code in args.states}
            codes = [code for code in codes if code in wanted]
        party_ids = [party.id for party in DEFAULT_PARTIES]
        seats = {entry.code: entry.house_seats for entry in metrics}
        results = run_hybrid_pr_by_state(
            DEFAULT_PARTIES,
            state_votes_from_two_party(two_party, codes, party_ids),
            seats,
            settings,
        )
        _print_pr(results, summarize_national_pr(results, DEFAULT_PARTIES), DEFAULT_PARTIES)
    return 0


def _print_house(metrics: Sequence[StateMetrics], total_seats: int, print_all: bool) -> None:
    population = sum(entry.population for entry in metrics)
    ec_total = sum(entry.ec_votes for entry in metrics)
    print(f"=== Cámara de {total_seats} escaños ===")
    print(f"   Población: {population:,}  Electores: {ec_total}")
    shown = [entry for entry in metrics if print_all or entry.house_delta != 0]
    if not shown:
        print("   Sin cambios respecto de la Cámara de 435.")
        return
    for entry in sorted(shown, key=lambda item: (-item.house_delta, item.code)):
        sign = "+" if entry.house_delta > 0 else ""
        print(
            f"   {entry.code}: {entry.house_seats} escaños ({sign}{entry.house_delta}), "
            f"{entry.ec_votes} electores, {entry.ec_per_million:.2f} por millón"
        )


def _print_outcomes(outcomes: Iterable[ElectionOutcome]) -> None:
    print("\n=== Elecciones históricas con este Colegio Electoral ===")
    for outcome in outcomes:
        winner = outcome.winner or "sin mayoría"
        print(
            f"   {outcome.year}: D {outcome.democrats} - R {outcome.republicans} "
            f"(mayoría {outcome.majority}) -> {winner}"
        )


def _print_pr(results: Sequence[StatePRResult], national: NationalPRResult, parties: Sequence[Party]) -> None:
    print("\n=== Representación proporcional ===")
    for state in results:
        seats = ", ".join(f"{party.id} {state.final_seats_by_party.get(party.id, 0)}" for party in parties)
        districts = "+".join(str(district.seats) for district in state.district_plan.districts) or "0"
        print(
            f"   {state.state_code}: {seats} | distritos {districts}, compensatorios {state.top_up_seats} "
            f"| Gallagher {state.gallagher:.3f}"
        )
    seats = ", ".join(f"{party.name} {national.total_seats_by_party.get(party.id, 0)}" for party in parties)
    print(f"\n   Nacional: {seats}")
    print(f"   Gallagher {national.gallagher:.3f}, votos sin representar {national.wasted_votes_proxy * 100:.2f}%")


if __name__ == "__main__":
    sys.exit(main())
