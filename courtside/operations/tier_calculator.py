"""
Tier & Streak Calculator

Derives a player's designated-weekday loyalty status from confirmed
bookings in the lookback window:
- this-month count: qualifying bookings in the current calendar month
- streak: consecutive qualifying bookings exactly 7 days apart, walking
  back from the most recent
- months active: whole months since the earliest qualifying booking was
  created, plus one
- tier: highest tier whose thresholds are all met (bronze otherwise)
- progress: weighted distance to the next tier, capped at 100

The status is advisory. Read failures degrade to a zeroed bronze status.
"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from courtside.config import Config
from courtside.constants import TierConstants
from courtside.data_models.tier import BookingRecord, TierDefinition, TierStatus
from courtside.utils.logger import setup_logger

logger = setup_logger(__name__)


def get_all_tiers() -> List[TierDefinition]:
    return list(TierConstants.TIERS)


def get_tier_benefits(tier: str) -> TierDefinition:
    """Definition for a tier name; unknown names fall back to bronze."""
    return next((t for t in TierConstants.TIERS if t.tier == tier), TierConstants.TIERS[0])


def tier_index(tier: str) -> int:
    return next((i for i, t in enumerate(TierConstants.TIERS) if t.tier == tier), -1)


def check_tier_upgrade(old_tier: str, new_tier: str) -> bool:
    return tier_index(new_tier) > tier_index(old_tier)


def count_streak(booking_dates: List[date]) -> int:
    """
    Consecutive weekly bookings ending at the most recent one.

    Each step back must land exactly 7 days earlier; the first mismatch
    ends the streak.
    """
    streak = 0
    expected = None
    for booking_date in sorted(booking_dates, reverse=True):
        if expected is None or booking_date == expected:
            streak += 1
            expected = booking_date - timedelta(days=7)
        else:
            break
    return streak


def months_between(now: datetime, earlier: datetime) -> int:
    """Whole calendar months from ``earlier`` to ``now``."""
    delta = relativedelta(now, earlier)
    return delta.years * 12 + delta.months


def season_reset_date(now: datetime, config=None) -> date:
    """Last day of the month that falls SEASON_LENGTH_DAYS from now."""
    config = config or Config
    target = (now + timedelta(days=config.SEASON_LENGTH_DAYS)).date()
    return target.replace(day=calendar.monthrange(target.year, target.month)[1])


def assign_tier(this_month_count: int, streak: int, months_active: int) -> str:
    for definition in reversed(TierConstants.TIERS):
        requirements = definition.requirements
        if (this_month_count >= requirements.bookings_this_month
                and streak >= requirements.minimum_streak
                and (not requirements.months_active or months_active >= requirements.months_active)):
            return definition.tier
    return TierConstants.BRONZE


def next_tier_progress(current_tier: str, this_month_count: int, streak: int, months_active: int) -> int:
    index = tier_index(current_tier)
    if index + 1 >= len(TierConstants.TIERS):
        return 100

    requirements = TierConstants.TIERS[index + 1].requirements
    progress = (this_month_count / requirements.bookings_this_month) * TierConstants.MONTH_COUNT_WEIGHT
    progress += (streak / requirements.minimum_streak) * TierConstants.STREAK_WEIGHT
    if requirements.months_active:
        progress += (months_active / requirements.months_active) * TierConstants.MONTHS_ACTIVE_WEIGHT
    else:
        progress += TierConstants.MONTHS_ACTIVE_WEIGHT
    return int(min(100, progress) + 0.5)


def compute_tier_status(bookings: List[BookingRecord], now: datetime, config=None) -> TierStatus:
    """
    Pure tier computation over already-fetched confirmed bookings.

    Args:
        bookings: Confirmed bookings, any order; entries older than the lookback are ignored
        now: Reference time
    """
    config = config or Config
    window_start = (now - timedelta(days=config.TIER_LOOKBACK_DAYS)).date()

    qualifying = sorted(
        (b for b in bookings
         if b.booking_date >= window_start and b.booking_date.weekday() == config.TIER_WEEKDAY),
        key=lambda b: b.booking_date,
    )

    this_month_count = sum(
        1 for b in qualifying
        if b.booking_date.year == now.year and b.booking_date.month == now.month
    )
    streak = count_streak([b.booking_date for b in qualifying])
    months_active = 0
    if qualifying:
        first = qualifying[0]
        created_at = first.created_at or datetime.combine(first.booking_date, time())
        months_active = months_between(now, created_at) + 1

    current_tier = assign_tier(this_month_count, streak, months_active)

    return TierStatus(
        current_tier=current_tier,
        this_month_count=this_month_count,
        streak_count=streak,
        months_active=months_active,
        total_count=len(qualifying),
        next_tier_progress=next_tier_progress(current_tier, this_month_count, streak, months_active),
        season_reset_date=season_reset_date(now, config),
    )


def default_tier_status(now: datetime, config=None) -> TierStatus:
    config = config or Config
    return TierStatus(
        current_tier=config.DEFAULT_TIER,
        this_month_count=0,
        streak_count=0,
        months_active=0,
        total_count=0,
        next_tier_progress=0,
        season_reset_date=season_reset_date(now, config),
    )


class TierCalculator:
    """Reads booking history and derives a player's tier status."""

    def __init__(self, store, config=None):
        self.store = store
        self.config = config or Config

    async def calculate_player_tier(self, player_id: str, now: Optional[datetime] = None) -> TierStatus:
        """Tier status for a player. Never raises for read failures."""
        now = now or datetime.now()
        since = (now - timedelta(days=self.config.TIER_LOOKBACK_DAYS)).date()
        try:
            bookings = await self.store.get_confirmed_bookings(player_id, since)
        except Exception as e:
            logger.error(f"Error calculating tier for player {player_id}: {e}")
            return default_tier_status(now, self.config)

        return compute_tier_status(bookings, now, self.config)
