# services/weight-balance-service/src/apps/core/apps.py
"""
Core Application Configuration
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.core'
    label = 'weight_balance_core'
    verbose_name = 'Weight & Balance Core'
