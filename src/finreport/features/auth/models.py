from tortoise import fields

from ...common.models import TimestampMixin, public_id_field


class User(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = public_id_field()
    username = fields.CharField(max_length=100, unique=True, db_index=True)
    email = fields.CharField(max_length=255, unique=True, db_index=True)
    hashed_password = fields.CharField(max_length=255)
    is_active = fields.BooleanField(default=True)

    transactions: fields.ReverseRelation["Transaction"]
    reports: fields.ReverseRelation["Report"]
    report_setting: fields.BackwardOneToOneRelation["ReportSetting"]

    def __str__(self):
        return f"{self.username} ({self.public_id})"

    class Meta:
        table = "users"
