# ABOUTME: Data models for swell alert subscriptions, detected windows, and send records
# ABOUTME: Includes the dedup log interface and an in-memory implementation

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Protocol

from surfscore.forecast.models import ScoredHourlyReading

NOTIFICATION_FREQUENCIES = ("threshold", "once", "twice", "realtime", "immediate")

AlertKey = tuple[int, str, datetime, datetime]


@dataclass
class AlertSubscription:
    """A user's swell alert and the score it last notified on"""
    id: int
    user_id: int
    spot_id: Optional[str] = None  # None = best spot across all spots
    min_wave_height_ft: Optional[float] = None
    min_quality_score: Optional[int] = None
    min_period_s: Optional[float] = None
    ideal_wind_only: bool = False
    notification_frequency: str = "immediate"
    email_enabled: bool = True
    sms_enabled: bool = False
    hours_advance_notice: Optional[int] = None
    last_notified_score: Optional[int] = None

    def __post_init__(self):
        if self.notification_frequency not in NOTIFICATION_FREQUENCIES:
            raise ValueError(
                f"Unknown notification frequency {self.notification_frequency!r}, "
                f"expected one of {NOTIFICATION_FREQUENCIES}"
            )
        if self.min_quality_score is not None and not 0 <= self.min_quality_score <= 100:
            raise ValueError(f"min_quality_score must be 0-100, got {self.min_quality_score}")

    @property
    def threshold(self) -> int:
        """Score threshold for the crossing detector (0 when unset)."""
        return self.min_quality_score if self.min_quality_score is not None else 0

    @property
    def channels(self) -> list[str]:
        channels = []
        if self.email_enabled:
            channels.append("email")
        if self.sms_enabled:
            channels.append("sms")
        return channels


@dataclass
class DetectedSwellWindow:
    """A contiguous span of hours where every alert threshold holds"""
    subscription_id: int
    spot_id: str
    start: datetime
    end: datetime
    peak_wave_height_ft: float
    peak_quality_score: int
    avg_quality_score: int
    avg_period_s: float
    hours: list[ScoredHourlyReading] = field(default_factory=list, repr=False)

    @property
    def key(self) -> AlertKey:
        return (self.subscription_id, self.spot_id, self.start, self.end)

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600

    def __str__(self) -> str:
        return (
            f"{self.spot_id} {self.start.isoformat()} -> {self.end.isoformat()}: "
            f"peak {self.peak_wave_height_ft:.1f}ft / {self.peak_quality_score}"
        )


@dataclass(frozen=True)
class AlertSendRecord:
    """Log entry proving a window was already notified for a subscription"""
    subscription_id: int
    spot_id: str
    window_start: datetime
    window_end: datetime
    peak_wave_height_ft: float
    peak_quality_score: int
    sent_at: datetime

    @property
    def key(self) -> AlertKey:
        return (self.subscription_id, self.spot_id, self.window_start, self.window_end)

    @classmethod
    def from_window(cls, window: DetectedSwellWindow, sent_at: Optional[datetime] = None) -> "AlertSendRecord":
        return cls(
            subscription_id=window.subscription_id,
            spot_id=window.spot_id,
            window_start=window.start,
            window_end=window.end,
            peak_wave_height_ft=window.peak_wave_height_ft,
            peak_quality_score=window.peak_quality_score,
            sent_at=sent_at or datetime.now(timezone.utc),
        )


class AlertLog(Protocol):
    """Dedup lookup/insert, implemented by the persistence layer"""

    def has_sent(self, key: AlertKey) -> bool: ...

    def record(self, record: AlertSendRecord) -> None: ...


class InMemoryAlertLog:
    """AlertLog held in a dict; keys are unique"""

    def __init__(self, records: Optional[list[AlertSendRecord]] = None):
        self._records: dict[AlertKey, AlertSendRecord] = {}
        for record in records or []:
            self.record(record)

    def has_sent(self, key: AlertKey) -> bool:
        return key in self._records

    def record(self, record: AlertSendRecord) -> None:
        if record.key in self._records:
            raise ValueError(f"Alert already recorded for {record.key}")
        self._records[record.key] = record

    def records(self) -> list[AlertSendRecord]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
