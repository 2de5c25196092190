from __future__ import annotations


class PebblesError(ValueError):
    """Base class for every failure the game core reports.

    Subclassing ValueError keeps the routes' `except ValueError` mapping working
    for anything the core raises; the narrower types pick their own status codes.
    """


class InvalidGameConfigError(PebblesError):
    pass


class InvalidTurnError(PebblesError):
    pass


class GameFinishedError(PebblesError):
    pass


class GameNotFoundError(PebblesError):
    pass


class GameBusyError(PebblesError):
    pass


class GameAlreadyInitializedError(PebblesError):
    pass
