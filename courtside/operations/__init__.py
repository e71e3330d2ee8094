"""
Operations Layer

Business logic that folds stored history into derived player state.
Each module exposes pure functions over already-fetched records plus a
small store-backed class that reads, computes and writes:

- RatingPropagator: tournament bracket results into Elo ratings
- StandingsAggregator: a completed league match into the league table
- TierCalculator: booking history into a loyalty tier status
- AchievementService: completed brackets into player placements
- BracketOperations: bracket seeding and winner advancement
"""

from .achievements import AchievementService, classify_player, extract_placements
from .bracket_operations import BracketOperations, build_single_elimination_bracket, record_bracket_result
from .rating_propagator import PropagationResult, RatingChange, RatingPropagator
from .standings import StandingsAggregator, determine_winner
from .tier_calculator import TierCalculator, compute_tier_status

__all__ = [
    'AchievementService', 'classify_player', 'extract_placements',
    'BracketOperations', 'build_single_elimination_bracket', 'record_bracket_result',
    'PropagationResult', 'RatingChange', 'RatingPropagator',
    'StandingsAggregator', 'determine_winner',
    'TierCalculator', 'compute_tier_status',
]
