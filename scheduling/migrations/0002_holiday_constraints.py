from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("scheduling", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="holiday",
            constraint=models.CheckConstraint(
                condition=~models.Q(holiday_type="specific") | models.Q(date__isnull=False),
                name="holiday_specific_has_date",
            ),
        ),
        migrations.AddConstraint(
            model_name="holiday",
            constraint=models.CheckConstraint(
                condition=~models.Q(holiday_type="range")
                | models.Q(
                    start_date__isnull=False,
                    end_date__isnull=False,
                    end_date__gt=models.F("start_date"),
                ),
                name="holiday_range_spans_days",
            ),
        ),
        migrations.AddConstraint(
            model_name="holiday",
            constraint=models.CheckConstraint(
                condition=~models.Q(holiday_type="recurring")
                | models.Q(recurring_day__isnull=False, recurring_day__lte=6),
                name="holiday_recurring_weekday",
            ),
        ),
    ]
