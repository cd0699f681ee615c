"""Analytics Module - demob pipeline reporting."""
from core.analytics.aggregator import aggregate, AnalyticsReport

__all__ = ['aggregate', 'AnalyticsReport']
