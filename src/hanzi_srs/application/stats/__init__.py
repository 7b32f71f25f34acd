# Application Stats Package
from .metrics_calculator import SessionTally, summarize
from .service import StatsService

__all__ = ["summarize", "SessionTally", "StatsService"]
