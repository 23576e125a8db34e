"""HTTP clients for the game data services."""

from .game_service import GameDataClient, ServiceRequest

__all__ = ["GameDataClient", "ServiceRequest"]
