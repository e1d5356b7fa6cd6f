"""
Engine outputs.

Models:
- RebalanceRun (one audited invocation, any run type)
- RebalanceSuggestion (push / lateral / recall transfer proposals)
- AllocationRecommendation (advisory restock lines)
"""

from .recommendation import AllocationRecommendation
from .run import RebalanceRun
from .suggestion import RebalanceSuggestion

__all__ = ["AllocationRecommendation", "RebalanceRun", "RebalanceSuggestion"]
