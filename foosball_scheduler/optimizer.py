"""
Parallel random search for the fairest schedule.

Every worker owns its random source, role pools and running best, and runs
its share of the trials without talking to the others. Results are only
combined once all workers have finished.
"""

import math
import os
import random
import threading
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .models import Schedule, OptimizationResult
from .fairness import schedule_score
from .validation import assert_valid
from .exceptions import InvalidInputError, SchedulerError
from .generator import RolePools, ScheduleGenerator
from .generator.repair import MAX_RESTARTS, PASS_FACTOR

MIN_PLAYERS = 4
SEED_STRIDE = 31337
EXECUTORS = ("process", "thread")


@dataclass
class WorkerResult:
    """Best schedule and sampled scores of one worker."""
    index: int
    schedule: Optional[Schedule]
    score: float
    scores: List[float] = field(default_factory=list)
    fallbacks: int = 0
    elapsed: float = 0.0


def worker_seed(index: int, base_seed: int = 0) -> int:
    """Seed for worker ``index`` (0-based); depends on nothing else."""
    return base_seed + (index + 1) * SEED_STRIDE


def partition_trials(total_trials: int, workers: int) -> List[int]:
    """Split trials as evenly as possible; earlier workers take the remainder."""
    base, remainder = divmod(total_trials, workers)
    return [base + (1 if i < remainder else 0) for i in range(workers)]


def run_worker(index: int, n_players: int, ratings: Sequence[float], trials: int,
               base_seed: int = 0, max_restarts: int = MAX_RESTARTS,
               pass_factor: int = PASS_FACTOR,
               stop_event: Optional[threading.Event] = None) -> WorkerResult:
    """Generate and score ``trials`` candidates, keeping the lowest score."""
    start = time.perf_counter()
    rng = random.Random(worker_seed(index, base_seed))
    generator = ScheduleGenerator(
        n_players, rng, RolePools(n_players),
        max_restarts=max_restarts,
        pass_factor=pass_factor,
    )

    best_score = math.inf
    best_schedule: Optional[Schedule] = None
    scores: List[float] = []
    fallbacks = 0

    for _ in range(trials):
        if stop_event is not None and stop_event.is_set():
            break

        candidate = generator.run()
        score = schedule_score(candidate, ratings)
        scores.append(score)
        if generator.stats.used_fallback:
            fallbacks += 1

        if score < best_score:
            best_score = score
            best_schedule = list(candidate)

    return WorkerResult(
        index=index,
        schedule=best_schedule,
        score=best_score,
        scores=scores,
        fallbacks=fallbacks,
        elapsed=time.perf_counter() - start,
    )


def reduce_results(results: Sequence[WorkerResult]) -> Tuple[Optional[Schedule], float, List[float]]:
    """
    Combine worker results.

    The best is the lowest score; on a tie the lowest worker index wins.
    Scores are concatenated in worker order.
    """
    ordered = sorted(results, key=lambda r: r.index)

    best_schedule = None
    best_score = math.inf
    all_scores: List[float] = []
    for result in ordered:
        all_scores.extend(result.scores)
        if result.schedule is not None and result.score < best_score:
            best_score = result.score
            best_schedule = result.schedule

    return best_schedule, best_score, all_scores


def _check_inputs(n_players: int, ratings: Sequence[float], total_trials: int,
                  workers: int, executor: str) -> None:
    if n_players < MIN_PLAYERS:
        raise InvalidInputError(
            f"At least {MIN_PLAYERS} players are required, got {n_players}"
        )
    if len(ratings) != n_players:
        raise InvalidInputError(
            f"Expected {n_players} ratings, got {len(ratings)}"
        )
    for pos, rating in enumerate(ratings, start=1):
        if not math.isfinite(rating) or rating <= 0:
            raise InvalidInputError(f"Rating of player {pos} must be positive: {rating}")
    if total_trials < 1:
        raise InvalidInputError(f"Trial budget must be positive: {total_trials}")
    if workers < 1:
        raise InvalidInputError(f"Worker count must be positive: {workers}")
    if executor not in EXECUTORS:
        raise InvalidInputError(f"Unknown executor: {executor}. Must be one of {EXECUTORS}")


def optimize(n_players: int, ratings: Sequence[float], total_trials: int,
             workers: Optional[int] = None, executor: str = "process",
             seed: int = 0, max_restarts: int = MAX_RESTARTS,
             pass_factor: int = PASS_FACTOR,
             stop_event: Optional[threading.Event] = None,
             verbose: bool = False) -> OptimizationResult:
    """
    Search ``total_trials`` random schedules across parallel workers.

    Args:
        n_players: Number of players (ids 1..n_players)
        ratings: Player ratings, indexed by id - 1
        total_trials: Candidate schedules to sample in total
        workers: Parallel workers (default: CPU count)
        executor: "process" or "thread"
        seed: Base seed; worker seeds derive from it and the worker index
        max_restarts: Repair attempts per candidate before falling back
        pass_factor: Repair passes per player in each attempt
        stop_event: Checked between trials; thread executor or one worker only
        verbose: Print per-worker progress

    Returns:
        OptimizationResult: Best schedule, its score and every sampled score
    """
    if workers is None:
        workers = os.cpu_count() or 1
    ratings = tuple(float(r) for r in ratings)
    _check_inputs(n_players, ratings, total_trials, workers, executor)

    workers = min(workers, total_trials)
    shares = partition_trials(total_trials, workers)
    if stop_event is not None and executor == "process" and workers > 1:
        raise InvalidInputError("stop_event is only supported with the thread executor")

    if verbose:
        print(f"Searching {total_trials} schedules for {n_players} players "
              f"on {workers} {executor} worker(s)...")

    start = time.perf_counter()
    if workers == 1:
        results = [run_worker(0, n_players, ratings, shares[0], seed,
                              max_restarts, pass_factor, stop_event)]
    else:
        pool_cls = ProcessPoolExecutor if executor == "process" else ThreadPoolExecutor
        with pool_cls(max_workers=workers) as pool:
            futures = [
                pool.submit(run_worker, i, n_players, ratings, share, seed,
                            max_restarts, pass_factor, stop_event)
                for i, share in enumerate(shares)
            ]
            results = [future.result() for future in futures]
    elapsed = time.perf_counter() - start

    if verbose:
        for result in results:
            print(f"  Worker {result.index}: {len(result.scores)} trials, "
                  f"best {result.score:.2f}, {result.fallbacks} fallback(s), "
                  f"{result.elapsed:.1f}s")
        print(f"Optimisation complete in {elapsed:.1f} seconds.")

    best_schedule, best_score, all_scores = reduce_results(results)
    if best_schedule is None:
        raise SchedulerError("Search was stopped before any trial completed")

    assert_valid(best_schedule, n_players)
    return OptimizationResult(
        schedule=best_schedule,
        score=best_score,
        scores=all_scores,
        workers=workers,
        trials=len(all_scores),
    )
