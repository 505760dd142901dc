# ABOUTME: Builds the text payload for a swell alert notification
# ABOUTME: Subject, long text, and SMS text; delivery is handled by the caller

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from surfscore.alerts.models import AlertSubscription, DetectedSwellWindow
from surfscore.ephemeris.sun import format_daylight_window
from surfscore.scoring.calculator import score_to_label
from surfscore.scoring.wave_height import format_wave_height
from surfscore.spots.profiles import SpotProfile


@dataclass
class NotificationPayload:
    """Channel-ready text for one detected window"""
    subject: str
    text: str
    sms_text: str


def quality_tag(score: int) -> str:
    if score >= 80:
        return "FIRING"
    if score >= 60:
        return "GOOD"
    return "FAIR"


def _time_of_day(hour: int) -> str:
    if 5 <= hour < 12:
        return "Morning"
    if 12 <= hour < 17:
        return "Afternoon"
    return "Evening"


def timing_label(start: datetime, now: datetime, tz: ZoneInfo) -> str:
    """
    "NOW", "This Morning", "Tomorrow Afternoon", or "Sat Evening".
    """
    if start <= now:
        return "NOW"

    local_start = start.astimezone(tz)
    local_now = now.astimezone(tz)
    part = _time_of_day(local_start.hour)

    if local_start.date() == local_now.date():
        return f"This {part}"
    if local_start.date() == local_now.date() + timedelta(days=1):
        return f"Tomorrow {part}"
    return f"{local_start.strftime('%a')} {part}"


def _duration_text(hours: float) -> str:
    if hours >= 24:
        return f"{round(hours / 24)} days"
    # A single-hour window still spans that hour
    return f"{max(1, round(hours))} hours"


def format_notification(
    window: DetectedSwellWindow,
    subscription: AlertSubscription,
    profile: SpotProfile,
    now: Optional[datetime] = None,
) -> NotificationPayload:
    """Format the subject and bodies for a detected swell window."""
    now = now or datetime.now(timezone.utc)
    tz = ZoneInfo(profile.timezone)

    waves = format_wave_height(window.peak_wave_height_ft)
    tag = quality_tag(window.peak_quality_score)
    label = score_to_label(window.peak_quality_score)
    when = timing_label(window.start, now, tz)
    daylight_window = format_daylight_window(window.start, window.end, profile.latitude, profile.longitude, tz)
    local_start = window.start.astimezone(tz)

    subject = f"{tag}: {profile.name} {waves} - {when} ({local_start:%b} {local_start.day})"

    lines = [
        f"{profile.name} is looking {label.lower()} ({window.peak_quality_score}/100).",
        f"When: {daylight_window}, {local_start:%a %b} {local_start.day} {local_start.hour % 12 or 12}:{local_start:%M %p} "
        f"for {_duration_text(window.duration_hours)}",
        f"Waves: {waves} (peak {window.peak_wave_height_ft:.1f}ft)",
        f"Period: {window.avg_period_s:g}s average",
        f"Average score: {window.avg_quality_score}",
    ]
    if subscription.notification_frequency == "threshold":
        lines.append(f"Your {subscription.threshold} threshold was just crossed.")

    sms_text = (
        f"{tag} {profile.name}: {waves}, {window.avg_period_s:g}s, "
        f"score {window.peak_quality_score} - {daylight_window}"
    )

    return NotificationPayload(subject=subject, text="\n".join(lines), sms_text=sms_text)
