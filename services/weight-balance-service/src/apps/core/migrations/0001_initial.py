import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='WeightBalanceSheet',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateTimeField(blank=True, null=True)),
                ('pilot_name', models.CharField(blank=True, default='', max_length=255)),
                ('route', models.CharField(blank=True, default='', max_length=255)),
                ('registration', models.CharField(blank=True, default='', max_length=50)),
                ('aircraft_type', models.CharField(blank=True, db_index=True, default='', max_length=20)),
                ('entries', models.JSONField(blank=True, default=list)),
                ('total_takeoff_weight', models.FloatField(blank=True, null=True)),
                ('takeoff_cog', models.FloatField(blank=True, null=True)),
                ('takeoff_moment', models.FloatField(blank=True, null=True)),
                ('fuel_burn_off', models.FloatField(blank=True, null=True)),
                ('landing_weight', models.FloatField(blank=True, null=True)),
                ('landing_cog', models.FloatField(blank=True, null=True)),
                ('landing_moment', models.FloatField(blank=True, null=True)),
                ('prepared_by', models.CharField(blank=True, default='', max_length=255)),
                ('license_no', models.CharField(blank=True, default='', max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Weight & Balance Sheet',
                'verbose_name_plural': 'Weight & Balance Sheets',
                'db_table': 'weight_balance_sheets',
                'ordering': ['created_at'],
            },
        ),
    ]
