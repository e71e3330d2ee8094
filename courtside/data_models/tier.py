"""
Attendance tier data models.

Provides immutable data transfer objects for the designated-weekday
loyalty program.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class BookingRecord:
    """Confirmed court booking as read from the store."""
    booking_date: date
    created_at: datetime
    status: str = "confirmed"


@dataclass(frozen=True)
class TierRequirements:
    bookings_this_month: int
    minimum_streak: int
    months_active: Optional[int] = None


@dataclass(frozen=True)
class TierDefinition:
    """One rung of the tier ladder with its display metadata."""
    tier: str
    name: str
    description: str
    icon: str
    perks: Tuple[str, ...]
    requirements: TierRequirements


@dataclass(frozen=True)
class TierStatus:
    """Derived tier state for one player; recomputed on demand."""
    current_tier: str
    this_month_count: int
    streak_count: int
    months_active: int
    total_count: int
    next_tier_progress: int  # 0-100
    season_reset_date: date
