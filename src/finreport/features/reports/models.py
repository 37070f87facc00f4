from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, public_id_field


class ReportFrequency(str, Enum):
    MONTHLY = "MONTHLY"


class ReportStatus(str, Enum):
    GENERATED = "GENERATED"
    NO_ACTIVITY = "NO_ACTIVITY"
    FAILED = "FAILED"


class ReportSetting(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = public_id_field()

    user: fields.OneToOneRelation["User"] = fields.OneToOneField(
        "models.User", related_name="report_setting", on_delete=fields.CASCADE
    )

    frequency = fields.CharEnumField(ReportFrequency, max_length=20, default=ReportFrequency.MONTHLY)
    is_enabled = fields.BooleanField(default=True)
    next_report_date = fields.DatetimeField(null=True)
    last_sent_date = fields.DatetimeField(null=True)

    def __str__(self):
        state = "enabled" if self.is_enabled else "disabled"
        return f"{self.frequency.value} reports ({state}), next: {self.next_report_date}"

    class Meta:
        table = "report_settings"


class Report(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = public_id_field()

    user: fields.ForeignKeyRelation["User"] = fields.ForeignKeyField(
        "models.User", related_name="reports", on_delete=fields.CASCADE
    )

    period = fields.CharField(max_length=100, description="e.g. 'January 1 - 31, 2024'")
    from_date = fields.DatetimeField()
    to_date = fields.DatetimeField()
    sent_date = fields.DatetimeField(null=True)
    status = fields.CharEnumField(ReportStatus, max_length=20)
    # income, expenses, balance, savings_rate, top_categories; null without activity
    summary = fields.JSONField(null=True)
    insights = fields.JSONField(null=True)

    def __str__(self):
        return f"Report {self.public_id} ({self.period}) - Status: {self.status.value}"

    class Meta:
        table = "reports"
        ordering = ["-created_at"]
