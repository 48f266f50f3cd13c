"""Request models for the contact form."""

from pydantic import EmailStr, Field

from contact.domain.value_objects import ContactMessage
from shared_kernel.api_models import CamelModel


class ContactRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=10, max_length=1000)

    def to_message(self) -> ContactMessage:
        return ContactMessage(
            name=self.name,
            email=str(self.email),
            subject=self.subject,
            body=self.message,
        )
