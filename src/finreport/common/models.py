"""Models module for the app.

Shared building blocks for the Tortoise ORM models of every feature: the
created/updated timestamp mixin and the KSUID generator used for the public
identifiers exposed over the API (internal integer keys never leave the
service)."""

from tortoise import fields, models
from ksuid import ksuid


def generate_ksuid() -> str:
    """Return a new K-Sortable Unique IDentifier as a 27 character string."""
    return str(ksuid.Ksuid())


def public_id_field() -> fields.CharField:
    return fields.CharField(
        max_length=27, unique=True, default=generate_ksuid, db_index=True
    )


class TimestampMixin(models.Model):
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True
