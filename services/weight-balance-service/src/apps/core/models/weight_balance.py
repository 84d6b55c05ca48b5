# services/weight-balance-service/src/apps/core/models/weight_balance.py
"""
Weight & Balance Sheet Model

Stored load sheets. A sheet is written once and never updated.
"""

import uuid

from django.db import models


class WeightBalanceSheet(models.Model):
    """
    Historical record of a computed load sheet.

    The schema is permissive: every field is optional and numbers are
    stored as submitted.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    # ==========================================================================
    # Flight Details
    # ==========================================================================
    date = models.DateTimeField(null=True, blank=True)
    pilot_name = models.CharField(max_length=255, blank=True, default='')
    route = models.CharField(max_length=255, blank=True, default='')
    registration = models.CharField(max_length=50, blank=True, default='')
    aircraft_type = models.CharField(max_length=20, blank=True, default='', db_index=True)

    # ==========================================================================
    # Load Stations
    # ==========================================================================
    # [{"description", "weight", "arm", "moment"}, ...]
    entries = models.JSONField(default=list, blank=True)

    # ==========================================================================
    # Totals
    # ==========================================================================
    total_takeoff_weight = models.FloatField(null=True, blank=True)
    takeoff_cog = models.FloatField(null=True, blank=True)
    takeoff_moment = models.FloatField(null=True, blank=True)
    fuel_burn_off = models.FloatField(null=True, blank=True)
    landing_weight = models.FloatField(null=True, blank=True)
    landing_cog = models.FloatField(null=True, blank=True)
    landing_moment = models.FloatField(null=True, blank=True)

    # ==========================================================================
    # Sign-off
    # ==========================================================================
    prepared_by = models.CharField(max_length=255, blank=True, default='')
    license_no = models.CharField(max_length=100, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'weight_balance_sheets'
        ordering = ['created_at']
        verbose_name = 'Weight & Balance Sheet'
        verbose_name_plural = 'Weight & Balance Sheets'

    def __str__(self):
        return f"{self.aircraft_type or 'Unknown'} sheet {self.id}"
