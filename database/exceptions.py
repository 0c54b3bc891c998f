class DatabaseError(Exception):
    """Base for errors raised by the repositories."""


class NotFoundError(DatabaseError):
    """The tournament, player, round or notification does not exist."""


class DuplicateError(DatabaseError):
    """A unique key is taken (tournament codes, subscription endpoints)."""


class IntegrityError(DatabaseError):
    """A referenced tournament or player does not exist."""


class RoundLockedError(DatabaseError):
    """Scores submitted against a round that is already complete."""
