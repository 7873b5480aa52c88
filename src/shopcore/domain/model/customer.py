"""Customer aggregate.

Customers are keyed naturally by their normalized e-mail address: the
store holds at most one customer per ``Email``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.value_objects import Address, Email


@dataclass
class Customer:
    id: str | None
    email: Email
    name: str
    phone: str = ""
    address: Address = field(default_factory=Address)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        email: str,
        name: str,
        phone: str = "",
        address: Address | None = None,
    ) -> Customer:
        """Create a new customer from checkout data."""
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        return Customer(
            id=None,
            email=Email.of(email),
            name=name.strip(),
            phone=(phone or "").strip(),
            address=address or Address(),
        )

    def change_address(self, address: Address) -> None:
        """Update the address used for future orders only."""
        self.address = address
        self.updated_at = datetime.now(timezone.utc)
