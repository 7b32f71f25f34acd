# Domain Stats Package
from .models import ProgressSummary

__all__ = ["ProgressSummary"]
