# services/weight-balance-service/src/apps/core/models/__init__.py
"""
Weight & Balance Service Models
"""

from .weight_balance import WeightBalanceSheet

__all__ = [
    'WeightBalanceSheet',
]
