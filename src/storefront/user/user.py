"""User aggregate: the customer an order belongs to."""

import re
from datetime import datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.domain import storefront

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@storefront.aggregate
class User:
    """A registered shopper. Immutable after registration except for removal."""

    email: String(required=True, max_length=254, unique=True)
    name: String(required=True, max_length=100)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @classmethod
    def register(cls, email, name):
        from storefront.user.events import UserRegistered

        user = cls(email=email.strip().lower(), name=name, created_at=datetime.now())
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                name=user.name,
                registered_at=user.created_at,
            )
        )
        return user

    def mark_removed(self):
        from storefront.user.events import UserRemoved

        self.raise_(UserRemoved(user_id=self.id, email=self.email))
