import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Venue",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name="ScheduleAuditLog",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("event_type", models.CharField(max_length=64)),
                ("actor_id", models.CharField(max_length=64)),
                ("before", models.JSONField(default=dict)),
                ("after", models.JSONField(default=dict)),
                ("timestamp", models.DateTimeField()),
            ],
            options={
                "ordering": ["timestamp"],
                "indexes": [
                    models.Index(fields=["event_type", "timestamp"], name="scheduling__event_t_3c1a9e_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Spot",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("operating_days", models.JSONField(default=list)),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                ("capacity", models.PositiveIntegerField(default=0)),
                (
                    "venue",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="spots",
                        to="scheduling.venue",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="Holiday",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                (
                    "holiday_type",
                    models.CharField(
                        choices=[("specific", "Specific"), ("range", "Range"), ("recurring", "Recurring")],
                        max_length=16,
                    ),
                ),
                ("date", models.DateField(blank=True, null=True)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("recurring_day", models.PositiveSmallIntegerField(blank=True, null=True)),
                (
                    "venue",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="holidays",
                        to="scheduling.venue",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["venue"], name="scheduling__venue_i_7d2f41_idx")],
            },
        ),
        migrations.CreateModel(
            name="Batch",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("program_id", models.CharField(max_length=64)),
                ("capacity", models.PositiveIntegerField(default=0)),
                ("partner_ids", models.JSONField(default=list)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("session_start_time", models.TimeField()),
                ("session_end_time", models.TimeField()),
                ("target_session_count", models.PositiveIntegerField()),
                (
                    "pattern",
                    models.CharField(
                        choices=[
                            ("MWF", "Monday Wed Fri"),
                            ("TTS", "Tue Thu Sat"),
                            ("weekend", "Weekend Only"),
                            ("manual", "Manual"),
                        ],
                        max_length=16,
                    ),
                ),
                ("manual_dates", models.JSONField(default=list)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("completed", "Completed"), ("inactive", "Inactive")],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("fee_amount", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("currency", models.CharField(default="INR", max_length=3)),
                ("discount_percentage", models.DecimalField(decimal_places=2, default=0, max_digits=5)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "spot",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="batches",
                        to="scheduling.spot",
                    ),
                ),
                (
                    "venue",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="batches",
                        to="scheduling.venue",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Session",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("sequence", models.PositiveIntegerField()),
                ("date", models.DateField()),
                ("start_time", models.TimeField()),
                ("end_time", models.TimeField()),
                (
                    "origin",
                    models.CharField(
                        choices=[("generated", "Generated"), ("manual", "Manual"), ("rescheduled", "Rescheduled")],
                        default="generated",
                        max_length=16,
                    ),
                ),
                ("original_date", models.DateField(blank=True, null=True)),
                ("original_start_time", models.TimeField(blank=True, null=True)),
                ("original_end_time", models.TimeField(blank=True, null=True)),
                ("reschedule_reason", models.TextField(blank=True, default="")),
                ("rescheduled_by", models.CharField(blank=True, max_length=64, null=True)),
                ("rescheduled_at", models.DateTimeField(blank=True, null=True)),
                (
                    "batch",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sessions",
                        to="scheduling.batch",
                    ),
                ),
            ],
            options={
                "ordering": ["sequence"],
                "indexes": [models.Index(fields=["batch", "date"], name="scheduling__batch_i_5e8b20_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("batch", "sequence"), name="unique_batch_sequence"),
                ],
            },
        ),
    ]
