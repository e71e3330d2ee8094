"""
Engine exceptions with user-friendly error messages.

Callers that surface errors to players should show ``user_message``;
``str(exc)`` carries the developer-facing detail.
"""

class EngineError(Exception):
    """Base exception for rating and progression engine errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class InvalidMatchDataError(EngineError):
    """Raised when a match does not have exactly two participation records."""
    def __init__(self, match_id, participant_count: int):
        super().__init__(
            f"Match {match_id} has {participant_count} participation records, expected 2",
            "❌ This match does not have valid results yet."
        )
        self.match_id = match_id
        self.participant_count = participant_count

class NotFoundError(EngineError):
    """Raised when a referenced tournament, bracket, match or league player is absent."""
    def __init__(self, entity: str, key):
        super().__init__(
            f"{entity} {key!r} not found",
            f"❌ {entity.capitalize()} not found!"
        )
        self.entity = entity
        self.key = key

class StoreIOError(EngineError):
    """Raised when a read or write against the record store fails."""
    def __init__(self, operation: str, details: str = None):
        super().__init__(
            f"Store error during {operation}: {details}",
            "❌ Database error occurred. Please try again later."
        )
        self.operation = operation

class BracketError(EngineError):
    """Raised when a bracket cannot be built or a result cannot be recorded."""
    def __init__(self, reason: str):
        super().__init__(
            f"Invalid bracket operation: {reason}",
            f"❌ {reason}"
        )
