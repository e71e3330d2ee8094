import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Engine configuration settings"""
    
    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///courtside.db')
    
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    
    # Rating defaults
    DEFAULT_ELO = int(os.getenv('DEFAULT_ELO', 1500))
    DEFAULT_SKILL_LEVEL = 2.5  # Self-reported skill scale
    
    # Elo calculation settings
    TOURNAMENT_K_BASE = 16      # K = base + per_round * round
    TOURNAMENT_K_PER_ROUND = 4
    MATCH_K_FACTOR = 32         # Quick 1v1 and doubles results
    
    # League settings
    LEAGUE_WIN_POINTS = 3
    
    # Attendance tier settings
    DEFAULT_TIER = 'bronze'
    TIER_LOOKBACK_DAYS = 180
    TIER_WEEKDAY = 2            # date.weekday(): Monday is 0, so 2 is Wednesday
    SEASON_LENGTH_DAYS = 90
    
    # Leaderboard settings
    RECENT_MATCH_DAYS = 30
    
    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DATABASE_URL:
            raise ValueError("DATABASE_URL is required")
        for name in ('TOURNAMENT_K_BASE', 'MATCH_K_FACTOR', 'TIER_LOOKBACK_DAYS',
                     'SEASON_LENGTH_DAYS', 'RECENT_MATCH_DAYS'):
            if getattr(cls, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if not 0 <= cls.TIER_WEEKDAY <= 6:
            raise ValueError("TIER_WEEKDAY must be between 0 (Monday) and 6 (Sunday)")
