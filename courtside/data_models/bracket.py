"""
Bracket data models for single-elimination tournaments.

Brackets are stored as JSON on the tournament row. These immutable
objects are the typed view of that JSON; ``from_dict``/``to_dict`` keep
the stored key names (``matchNumber``, ``nextMatchId``, ``roundNames``).
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class BracketPlayer:
    """A participant slot in a bracket match."""
    id: str
    name: str = ""
    elo_rating: Optional[float] = None
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["BracketPlayer"]:
        if not data or not data.get("id"):
            return None
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            elo_rating=data.get("eloRating"),
            seed=data.get("seed"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "name": self.name, "eloRating": self.elo_rating}
        if self.seed is not None:
            data["seed"] = self.seed
        return data


@dataclass(frozen=True)
class BracketMatch:
    """Single bracket match. ``winner`` is a player id or None."""
    id: str
    round: int
    match_number: int
    player1: Optional[BracketPlayer] = None
    player2: Optional[BracketPlayer] = None
    winner: Optional[str] = None
    next_match_id: Optional[str] = None

    @property
    def player1_id(self) -> Optional[str]:
        return self.player1.id if self.player1 else None

    @property
    def player2_id(self) -> Optional[str]:
        return self.player2.id if self.player2 else None

    @property
    def participant_ids(self) -> List[str]:
        return [pid for pid in (self.player1_id, self.player2_id) if pid]

    @property
    def has_both_players(self) -> bool:
        return self.player1 is not None and self.player2 is not None

    @property
    def is_decided(self) -> bool:
        """Both slots filled and the winner is one of them."""
        return self.has_both_players and self.winner in (self.player1_id, self.player2_id)

    def involves(self, player_id: str) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketMatch":
        return cls(
            id=data["id"],
            round=int(data["round"]),
            match_number=int(data.get("matchNumber", 0)),
            player1=BracketPlayer.from_dict(data.get("player1")),
            player2=BracketPlayer.from_dict(data.get("player2")),
            winner=data.get("winner") or None,
            next_match_id=data.get("nextMatchId") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "round": self.round,
            "matchNumber": self.match_number,
            "player1": self.player1.to_dict() if self.player1 else None,
            "player2": self.player2.to_dict() if self.player2 else None,
            "winner": self.winner,
            "nextMatchId": self.next_match_id,
        }


@dataclass(frozen=True)
class Bracket:
    """
    Ordered collection of matches with the declared round count.

    Round ``rounds`` holds the final, ``rounds - 1`` the semifinals.
    """
    matches: Tuple[BracketMatch, ...]
    rounds: int
    round_names: Tuple[str, ...] = field(default_factory=tuple)
    sport: Optional[str] = None  # From the owning tournament, not stored in the JSON

    def ordered_matches(self) -> List[BracketMatch]:
        """Matches ascending by round, then match number within the round."""
        return sorted(self.matches, key=lambda m: (m.round, m.match_number))

    def matches_in_round(self, round_number: int) -> List[BracketMatch]:
        return [m for m in self.ordered_matches() if m.round == round_number]

    def final_match(self) -> Optional[BracketMatch]:
        finals = self.matches_in_round(self.rounds)
        return finals[0] if finals else None

    def get_match(self, match_id: str) -> Optional[BracketMatch]:
        return next((m for m in self.matches if m.id == match_id), None)

    def participant_ids(self) -> List[str]:
        """Distinct player ids in traversal order of first appearance."""
        seen = []
        for match in self.ordered_matches():
            for player_id in match.participant_ids:
                if player_id not in seen:
                    seen.append(player_id)
        return seen

    def with_match(self, updated: BracketMatch) -> "Bracket":
        """Copy of this bracket with the match of the same id replaced."""
        return replace(
            self,
            matches=tuple(updated if m.id == updated.id else m for m in self.matches),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any], sport: Optional[str] = None) -> "Bracket":
        matches = tuple(BracketMatch.from_dict(m) for m in data.get("matches") or [])
        rounds = data.get("rounds")
        if rounds is None:
            rounds = max((m.round for m in matches), default=0)
        return cls(
            matches=matches,
            rounds=int(rounds),
            round_names=tuple(data.get("roundNames") or ()),
            sport=sport,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": [m.to_dict() for m in self.matches],
            "rounds": self.rounds,
            "roundNames": list(self.round_names),
        }
