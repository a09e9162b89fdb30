"""Mapping global time onto a sequence of segments."""

from typing import Sequence


TIME_EPS = 1e-10


def get_local_time(t_global: float, durations: Sequence[float]) -> tuple[int, float]:
    """
    Find the segment active at t_global.

    The active segment is the first one whose cumulative end time exceeds
    t_global, so a junction time belongs to the later segment. Times at or
    slightly past the total duration resolve to the last segment with a
    positive duration.

    Args:
        t_global: Time since the start of the first segment
        durations: Duration of each segment

    Returns:
        (segment_id, t_local)
    """
    if len(durations) == 0:
        raise ValueError("No segments to evaluate")

    total = float(sum(durations))
    if t_global < -TIME_EPS or t_global > total + TIME_EPS:
        raise ValueError(f"Time {t_global} outside trajectory [0, {total}]")

    t_start = 0.0
    for i, d in enumerate(durations):
        if t_start + d > t_global:
            return i, max(t_global - t_start, 0.0)
        t_start += d

    # trailing zero-length segments cannot be evaluated
    last = len(durations) - 1
    while last > 0 and durations[last] <= 0.0:
        last -= 1
    return last, t_global - float(sum(durations[:last]))
