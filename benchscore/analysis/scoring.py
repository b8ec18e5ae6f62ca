"""Score engine: normalize runtimes against best recorded times."""

from collections.abc import Iterable, Mapping

from ..errors import UnknownCaseError
from ..storage.models import EPSILON, BenchmarkResult, RawResult, ReferenceEntry

MAX_SCORE = 100.0


def score(runtime: float, original_best_time: float) -> float:
    """Compute a bounded score for one runtime.

    Branches are checked in order:

    1. Both runtime and best time are zero: 100.
    2. Positive best time and runtime not slower than it: 100.
    3. Zero best time: best time is taken as ``EPSILON``.
    4. Zero runtime: runtime is taken as ``EPSILON``.
    5. Otherwise the ratio ``best / runtime`` scaled to 100.

    Args:
        runtime: Measured runtime in seconds (>= 0)
        original_best_time: Best time as recorded, possibly zero

    Returns:
        Score in [0, 100]
    """
    if runtime == 0 and original_best_time == 0:
        result = MAX_SCORE
    elif original_best_time > 0 and runtime <= original_best_time:
        result = MAX_SCORE
    elif original_best_time == 0:
        result = 100 / (runtime / EPSILON)
    elif runtime == 0:
        # Unreachable after the branch above; kept so every input has a defined path.
        result = 100 / (EPSILON / original_best_time)
    else:
        result = 100 / (runtime / original_best_time)

    return min(result, MAX_SCORE)


def score_result(raw: RawResult, entry: ReferenceEntry) -> BenchmarkResult:
    """Attach reference id and score to a parsed row."""
    return BenchmarkResult(
        id=entry.id,
        name=raw.name,
        runtime=raw.runtime,
        best_time=entry.best_time,
        score=score(raw.runtime, entry.original_best_time),
        status=raw.status,
    )


def score_results(
    raws: Iterable[RawResult],
    reference: Mapping[str, ReferenceEntry],
) -> list[BenchmarkResult]:
    """Score rows produced by ``parse_results`` against the same reference.

    Raises:
        UnknownCaseError: If a row names a case the reference lacks
    """
    scored = []
    for raw in raws:
        entry = reference.get(raw.name)
        if entry is None:
            raise UnknownCaseError(raw.name)
        scored.append(score_result(raw, entry))
    return scored
