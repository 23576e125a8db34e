"""Exception hierarchy for the battlepass tracker."""

from __future__ import annotations


class BattlepassError(Exception):
    """Base exception for all tracker failures."""

    def __init__(self, message: str, **metadata: object) -> None:
        super().__init__(message)
        self.message = message
        self.metadata = metadata


class LocalArtifactMissing(BattlepassError):
    """A local file the game client writes could not be found or read."""


class MissingEnvironment(LocalArtifactMissing):
    """The environment variable pointing at the local data directory is unset."""

    def __init__(self, variable: str = "LOCALAPPDATA") -> None:
        super().__init__(f"{variable} is not defined", variable=variable)


class ParseError(BattlepassError):
    """A local file did not contain the expected value."""


class UpstreamDataError(BattlepassError):
    """A remote response lacked an expected field."""


class AuthExchangeError(BattlepassError):
    """The redirect-based access token exchange did not yield a token."""


class ProgressNotFound(BattlepassError):
    """The battlepass contract was missing from the contract list."""

    def __init__(self, message: str = "Failed to get battlepass data") -> None:
        super().__init__(message)


class SeasonNotFound(BattlepassError):
    """No active act was present in the season list."""

    def __init__(self, message: str = "Failed to find the active act") -> None:
        super().__init__(message)
