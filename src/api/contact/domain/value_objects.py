"""Value objects for the contact form."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactMessage:
    """A message submitted through the public contact form."""

    name: str
    email: str
    subject: str
    body: str

    @property
    def sender_display(self) -> str:
        return f"{self.name} <{self.email}>"
