import uuid

from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Float, Text, JSON,
    ForeignKey, UniqueConstraint, CheckConstraint
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Player(Base):
    __tablename__ = 'players'

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(255), index=True)
    sport = Column(String(50), nullable=False, index=True)

    # Ratings: NULL means "never rated", read as Config defaults
    elo_rating = Column(Integer, nullable=True)
    skill_level = Column(Float, nullable=True)  # Self-reported 1.0-5.0 scale

    created_at = Column(DateTime, default=func.now())

    # Relationships
    match_players = relationship("MatchPlayer", back_populates="player", cascade="all, delete-orphan")
    league_entries = relationship("LeaguePlayer", back_populates="player", cascade="all, delete-orphan")
    bookings = relationship("CourtBooking", back_populates="player", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Player(id={self.id}, name='{self.name}', sport='{self.sport}', elo={self.elo_rating})>"

class Tournament(Base):
    __tablename__ = 'tournaments'

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), nullable=False)
    sport = Column(String(50), nullable=False)
    start_date = Column(Date)
    status = Column(String(20), nullable=False, default='upcoming')  # upcoming, in_progress, completed

    # {"matches": [...], "rounds": R, "roundNames": [...]}
    bracket_data = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=func.now())

    def __repr__(self):
        return f"<Tournament(name='{self.name}', status='{self.status}')>"

class MiniLeague(Base):
    __tablename__ = 'mini_leagues'

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(200), nullable=False)
    sport = Column(String(50), nullable=False)
    location = Column(String(200))
    start_date = Column(Date)
    status = Column(String(20), default='active')
    weeks_between_matches = Column(Integer, default=1)

    created_at = Column(DateTime, default=func.now())

    # Relationships
    players = relationship("LeaguePlayer", back_populates="league", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<MiniLeague(name='{self.name}', sport='{self.sport}')>"

class LeaguePlayer(Base):
    __tablename__ = 'league_players'

    id = Column(Integer, primary_key=True)
    league_id = Column(String(36), ForeignKey('mini_leagues.id'), nullable=False, index=True)
    player_id = Column(String(36), ForeignKey('players.id'), nullable=False, index=True)

    # Cumulative standings, only ever incremented
    matches_played = Column(Integer, nullable=False, default=0)
    matches_won = Column(Integer, nullable=False, default=0)
    matches_lost = Column(Integer, nullable=False, default=0)
    points = Column(Integer, nullable=False, default=0)

    # Relationships
    league = relationship("MiniLeague", back_populates="players")
    player = relationship("Player", back_populates="league_entries")

    __table_args__ = (
        UniqueConstraint('league_id', 'player_id', name='uq_league_player'),
        CheckConstraint('matches_played >= 0', name='ck_league_player_played'),
    )

    def __repr__(self):
        return f"<LeaguePlayer(league_id={self.league_id}, player_id={self.player_id}, points={self.points})>"

class Match(Base):
    __tablename__ = 'matches'

    id = Column(String(36), primary_key=True, default=_new_id)
    league_id = Column(String(36), ForeignKey('mini_leagues.id'), nullable=True, index=True)
    sport = Column(String(50))
    location = Column(String(200))
    round_number = Column(Integer)
    status = Column(String(20), default='scheduled')
    played_at = Column(DateTime)

    created_at = Column(DateTime, default=func.now())

    # Relationships
    participants = relationship("MatchPlayer", back_populates="match", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Match(id={self.id}, status='{self.status}')>"

class MatchPlayer(Base):
    __tablename__ = 'match_players'

    id = Column(Integer, primary_key=True)
    match_id = Column(String(36), ForeignKey('matches.id'), nullable=False, index=True)
    player_id = Column(String(36), ForeignKey('players.id'), nullable=False, index=True)

    has_confirmed = Column(Integer, default=0)
    performance_rating = Column(Float, nullable=True)
    play_rating = Column(Float, nullable=True)
    feedback = Column(Text)

    created_at = Column(DateTime, default=func.now())

    # Relationships
    match = relationship("Match", back_populates="participants")
    player = relationship("Player", back_populates="match_players")

    def __repr__(self):
        return f"<MatchPlayer(match_id={self.match_id}, player_id={self.player_id}, rating={self.performance_rating})>"

class CourtBooking(Base):
    __tablename__ = 'court_bookings'

    id = Column(Integer, primary_key=True)
    player_id = Column(String(36), ForeignKey('players.id'), nullable=False, index=True)
    booking_date = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default='pending')  # pending, confirmed, cancelled

    created_at = Column(DateTime, default=func.now())

    # Relationships
    player = relationship("Player", back_populates="bookings")

    def __repr__(self):
        return f"<CourtBooking(player_id={self.player_id}, date={self.booking_date}, status='{self.status}')>"
