# ABOUTME: Edge-triggered threshold state machine for swell alert notifications
# ABOUTME: Pure transition (prior score, current score, threshold) -> (new state, notify?)

from dataclasses import dataclass
from typing import Optional

from surfscore.alerts.models import NOTIFICATION_FREQUENCIES


@dataclass(frozen=True)
class ThresholdDecision:
    """Outcome of one evaluation: whether to notify and the state to persist"""
    should_notify: bool
    last_notified_score: int


def evaluate_threshold(prior_score: Optional[int], current_score: int, threshold: int) -> ThresholdDecision:
    """
    Edge-triggered crossing detector.

    Notifies only on a move from below the threshold (or no history) to
    at/above it. The new state is always the current score, so dropping
    below re-arms the detector for the next rise.
    """
    if current_score < threshold:
        return ThresholdDecision(should_notify=False, last_notified_score=current_score)

    crossed = prior_score is None or prior_score < threshold
    return ThresholdDecision(should_notify=crossed, last_notified_score=current_score)


def decide_notification(
    frequency: str,
    prior_score: Optional[int],
    current_score: int,
    threshold: int,
) -> ThresholdDecision:
    """
    Notification decision for any frequency mode.

    "threshold" is edge-triggered. once/twice/realtime/immediate are
    level-triggered; they differ only in how often the scheduler runs the
    cycle.
    """
    if frequency not in NOTIFICATION_FREQUENCIES:
        raise ValueError(f"Unknown notification frequency {frequency!r}")

    if frequency == "threshold":
        return evaluate_threshold(prior_score, current_score, threshold)

    return ThresholdDecision(should_notify=current_score >= threshold, last_notified_score=current_score)
