"""Nearest-neighbour search over a sequence of candidate records."""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, Optional, Sequence

from weighted_match.config.models import DEFAULT_THRESHOLD, MatchResult

DistanceFunction = Callable[[Any, Any], float]

def candidate_distances(
    distance: DistanceFunction,
    item: Any,
    candidates: Iterable[Any],
    max_workers: Optional[int] = None
) -> List[float]:
    """
    Distance from `item` to every candidate, in candidate order.

    Args:
        distance: Pairwise distance function
        item: Query record
        candidates: Records to compare against
        max_workers: Fan out over a thread pool when greater than 1

    Returns:
        List[float]: One distance per candidate
    """
    if max_workers is not None and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            # map() yields in submission order.
            return list(executor.map(lambda candidate: distance(item, candidate), candidates))
    return [distance(item, candidate) for candidate in candidates]

def closest_match(
    distance: DistanceFunction,
    item: Any,
    candidates: Sequence[Any],
    threshold: float = DEFAULT_THRESHOLD,
    max_workers: Optional[int] = None
) -> Optional[MatchResult]:
    """
    Find the candidate closest to `item`.

    Ties go to the earliest candidate. The best candidate is only returned
    when its distance is within the threshold.

    Args:
        distance: Pairwise distance function
        item: Query record
        candidates: Records to search
        threshold: Largest distance still counted as a match
        max_workers: Thread pool size for computing distances

    Returns:
        Optional[MatchResult]: Best match, or None if nothing is close enough
    """
    candidates = list(candidates)
    distances = candidate_distances(distance, item, candidates, max_workers)
    if not distances:
        return None

    best_index = min(range(len(distances)), key=lambda index: (distances[index], index))
    best_distance = distances[best_index]

    if best_distance <= threshold:
        return MatchResult(item=candidates[best_index], distance=best_distance)
    return None

def closest_matching_item(
    distance: DistanceFunction,
    item: Any,
    candidates: Sequence[Any],
    threshold: float = DEFAULT_THRESHOLD,
    max_workers: Optional[int] = None
) -> Any:
    """Closest candidate within the threshold, or None."""
    match = closest_match(distance, item, candidates, threshold, max_workers)
    return match.item if match is not None else None

def is_match(
    distance: DistanceFunction,
    a: Any,
    b: Any,
    threshold: float = DEFAULT_THRESHOLD
) -> bool:
    return distance(a, b) <= threshold
