# ABOUTME: Alert check cycle coordinating detection, threshold state, and deduplication
# ABOUTME: One bad subscription is logged and skipped; the batch always completes

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence

from surfscore.alerts.detector import SwellWindowDetector
from surfscore.alerts.formatter import NotificationPayload, format_notification
from surfscore.alerts.models import (
    AlertLog,
    AlertSendRecord,
    AlertSubscription,
    DetectedSwellWindow,
    InMemoryAlertLog,
)
from surfscore.alerts.state import decide_notification
from surfscore.debug import debug_log
from surfscore.forecast.models import ScoredHourlyReading
from surfscore.spots.profiles import SPOT_PROFILES, SpotProfile

log = logging.getLogger(__name__)


@dataclass
class Notification:
    """A decision to notify, handed to the transport collaborator"""
    subscription_id: int
    user_id: int
    window: DetectedSwellWindow
    payload: NotificationPayload
    channels: list[str]


@dataclass
class AlertCycleResult:
    """Everything one cycle produced for the caller to persist or send"""
    notifications: list[Notification] = field(default_factory=list)
    last_notified_scores: dict[int, int] = field(default_factory=dict)
    errors: dict[int, str] = field(default_factory=dict)
    suppressed_duplicates: int = 0


class AlertChecker:
    """Runs the periodic alert check over all subscriptions"""

    def __init__(
        self,
        alert_log: Optional[AlertLog] = None,
        profiles: Optional[Mapping[str, SpotProfile]] = None,
        detector: Optional[SwellWindowDetector] = None,
    ):
        self.alert_log = alert_log if alert_log is not None else InMemoryAlertLog()
        self.profiles = profiles if profiles is not None else SPOT_PROFILES
        self.detector = detector or SwellWindowDetector()

    def run_cycle(
        self,
        subscriptions: Sequence[AlertSubscription],
        timelines: Mapping[str, Sequence[ScoredHourlyReading]],
        now: Optional[datetime] = None,
    ) -> AlertCycleResult:
        """
        Evaluate every subscription once.

        Args:
            subscriptions: Active alert subscriptions
            timelines: Scored timeline per spot id
            now: Evaluation instant (defaults to the current time)

        Returns:
            AlertCycleResult with notifications to send, the new
            last_notified_score per subscription, and per-subscription errors.
        """
        now = now or datetime.now(timezone.utc)
        result = AlertCycleResult()

        log.info(f"Checking {len(subscriptions)} alert subscription(s)")

        for subscription in subscriptions:
            try:
                self._evaluate(subscription, timelines, now, result)
            except Exception as e:
                sub_id = getattr(subscription, "id", None)
                log.error(f"Alert {sub_id} evaluation failed: {type(e).__name__}: {e}")
                result.errors[sub_id] = f"{type(e).__name__}: {e}"

        log.info(
            f"Alert check complete: {len(result.notifications)} notification(s), "
            f"{result.suppressed_duplicates} duplicate(s) suppressed, {len(result.errors)} error(s)"
        )
        return result

    def _evaluate(
        self,
        subscription: AlertSubscription,
        timelines: Mapping[str, Sequence[ScoredHourlyReading]],
        now: datetime,
        result: AlertCycleResult,
    ) -> None:
        """
        Evaluate one subscription.

        Notifications are built in full before anything is written to the
        alert log or the result, so a failure leaves no partial state.
        """
        windows = self.detector.detect(subscription, timelines, self.profiles, now)
        current_score = max((w.peak_quality_score for w in windows), default=0)

        decision = decide_notification(
            subscription.notification_frequency,
            subscription.last_notified_score,
            current_score,
            subscription.threshold,
        )

        debug_log(
            f"Alert {subscription.id}: {len(windows)} window(s), score {subscription.last_notified_score} "
            f"-> {current_score}, notify={decision.should_notify}",
            "ALERTS",
        )

        pending: list[Notification] = []
        duplicates = 0

        if decision.should_notify:
            for window in windows:
                if self.alert_log.has_sent(window.key):
                    duplicates += 1
                    debug_log(f"Alert {subscription.id}: already sent {window}", "ALERTS")
                    continue

                profile = self.profiles.get(window.spot_id)
                if profile is None:
                    log.warning(f"Alert {subscription.id}: no profile for spot {window.spot_id}, skipping window")
                    continue

                pending.append(
                    Notification(
                        subscription_id=subscription.id,
                        user_id=subscription.user_id,
                        window=window,
                        payload=format_notification(window, subscription, profile, now),
                        channels=subscription.channels,
                    )
                )

        for notification in pending:
            self.alert_log.record(AlertSendRecord.from_window(notification.window, sent_at=now))
            log.info(
                f"Alert {subscription.id}: notifying for {notification.window.spot_id} "
                f"window {notification.window.start.isoformat()}"
            )

        result.notifications.extend(pending)
        result.suppressed_duplicates += duplicates
        result.last_notified_scores[subscription.id] = decision.last_notified_score
