# services/weight-balance-service/src/apps/api/apps.py
"""
API Application Configuration
"""

from django.apps import AppConfig


class ApiConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.api'
    label = 'weight_balance_api'
    verbose_name = 'Weight & Balance API'
