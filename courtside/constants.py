"""
Engine-wide constants for the Courtside rating and progression engine.

Tunable defaults (starting Elo, K-factors, lookback windows) live on
``Config``; this module holds the fixed tables the engine folds against.
"""

from courtside.data_models.tier import TierDefinition, TierRequirements

class TierConstants:
    """Designated-weekday loyalty ladder, lowest tier first."""
    
    BRONZE = 'bronze'
    SILVER = 'silver'
    GOLD = 'gold'
    PLATINUM = 'platinum'
    LEGEND = 'legend'
    
    TIERS = (
        TierDefinition(
            tier=BRONZE,
            name='Bronze Warrior',
            description='Welcome to Wednesday Warriors!',
            icon='🥉',
            perks=(
                'Wednesday reminder notifications',
                'Basic leaderboard access',
                'Community access',
            ),
            requirements=TierRequirements(bookings_this_month=1, minimum_streak=1),
        ),
        TierDefinition(
            tier=SILVER,
            name='Silver Champion',
            description='Consistent Wednesday warrior',
            icon='🥈',
            perks=(
                'All Bronze perks',
                '5% discount on Wednesday bookings',
                'Priority booking 24h ahead',
                'Silver badge on profile',
            ),
            requirements=TierRequirements(bookings_this_month=3, minimum_streak=2),
        ),
        TierDefinition(
            tier=GOLD,
            name='Gold Elite',
            description='Dedicated Wednesday player',
            icon='🥇',
            perks=(
                'All Silver perks',
                '10% discount on Wednesday bookings',
                'Free court upgrade when available',
                'Gold badge and profile frame',
                'Access to exclusive Wednesday events',
            ),
            requirements=TierRequirements(bookings_this_month=4, minimum_streak=3),
        ),
        TierDefinition(
            tier=PLATINUM,
            name='Platinum Master',
            description='Elite Wednesday warrior',
            icon='💎',
            perks=(
                'All Gold perks',
                '15% discount on Wednesday bookings',
                'Priority customer support',
                'Platinum badge with animated effects',
                'Monthly coaching session credit',
                'VIP tournament access',
            ),
            requirements=TierRequirements(bookings_this_month=4, minimum_streak=4),
        ),
        TierDefinition(
            tier=LEGEND,
            name='Wednesday Legend',
            description='Legendary dedication to Wednesday play',
            icon='👑',
            perks=(
                'All Platinum perks',
                '20% discount on all bookings',
                'Lifetime Wednesday Warrior status',
                'Legendary crown badge',
                'Personal concierge service',
                'Featured player spotlight',
                'Exclusive Legend-only events',
            ),
            requirements=TierRequirements(bookings_this_month=4, minimum_streak=6, months_active=6),
        ),
    )
    
    # Progress-to-next-tier weights (sum to 100)
    MONTH_COUNT_WEIGHT = 50
    STREAK_WEIGHT = 30
    MONTHS_ACTIVE_WEIGHT = 20

class AchievementConstants:
    """Tournament placement types, highest precedence first."""
    
    WINNER = 'winner'
    RUNNER_UP = 'runner_up'
    SEMIFINALIST = 'semifinalist'

class BookingConstants:
    CONFIRMED = 'confirmed'

class TournamentConstants:
    COMPLETED = 'completed'
    
    MAX_SEEDS = 4

class PaginationConstants:
    """Constants for paginated displays."""
    
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 50
