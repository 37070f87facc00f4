from enum import Enum

from tortoise import fields

from ...common.models import TimestampMixin, public_id_field


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Transaction(TimestampMixin):
    id = fields.IntField(primary_key=True)
    public_id = public_id_field()

    user: fields.ForeignKeyRelation["User"] = fields.ForeignKeyField(
        "models.User", related_name="transactions", on_delete=fields.CASCADE
    )

    type = fields.CharEnumField(TransactionType, max_length=20)
    amount = fields.FloatField()
    category = fields.CharField(max_length=100)
    description = fields.TextField(null=True)
    date = fields.DatetimeField(db_index=True)

    def __str__(self):
        return f"{self.type.value} {self.amount:.2f} ({self.category}) on {self.date:%Y-%m-%d}"

    class Meta:
        table = "transactions"
        ordering = ["-date"]
