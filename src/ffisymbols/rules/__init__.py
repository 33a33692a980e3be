"""Rules module initialization."""

from .engine import MarkerRuleEngine, MarkerRule, create_default_engine

__all__ = ["MarkerRuleEngine", "MarkerRule", "create_default_engine"]
