"""User profile binding a Django user to a role code and a tenant."""

from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from modules.accounts.roles import CUSTOMER_ROLE_CODES, RoleCode
from modules.core.models import BaseModel


class UserProfile(BaseModel):
    """Role assignment of a user.

    ``customer_id`` identifies the B2B customer (tenant) of customer users
    and must stay empty for internal staff.
    """

    user: models.OneToOneField = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    role: models.CharField = models.CharField(
        max_length=30,
        choices=RoleCode.choices,
    )
    customer_id: models.UUIDField = models.UUIDField(null=True, blank=True)

    class Meta:
        db_table = "user_profiles"

    def clean(self) -> None:
        super().clean()
        if self.role in CUSTOMER_ROLE_CODES and self.customer_id is None:
            raise ValidationError(
                {"customer_id": "Customer users must belong to a customer."}
            )
        if self.role not in CUSTOMER_ROLE_CODES and self.customer_id is not None:
            raise ValidationError(
                {"customer_id": "Internal users cannot belong to a customer."}
            )

    def __str__(self) -> str:
        return f"{self.user} [{self.role}]"
