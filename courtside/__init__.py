"""
Courtside rating and progression engine.

Derives player state from stored history: Elo ratings from tournament
brackets, league standings from match results, and attendance tiers
from court bookings.
"""

__version__ = "0.1.0"
