"""Auto-dispatch trigger services."""

from .threshold import DispatchTrigger, evaluate_dispatch_trigger

__all__ = ["DispatchTrigger", "evaluate_dispatch_trigger"]
