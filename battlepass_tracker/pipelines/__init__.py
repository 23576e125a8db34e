"""Pipeline orchestration for the battlepass tracker."""

from .battlepass_pipeline import RETRY_MESSAGE, BattlepassPipeline, BattlepassSnapshot

__all__ = [
	"RETRY_MESSAGE",
	"BattlepassPipeline",
	"BattlepassSnapshot",
]
