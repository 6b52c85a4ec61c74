from pydantic import BaseModel, EmailStr, Field, field_validator


class ContactMessage(BaseModel):
    """Contact form submission relayed to the form-processing endpoint."""

    name: str = Field(..., min_length=1, max_length=200, description="Sender name")
    email: EmailStr = Field(..., description="Sender e-mail address")
    message: str = Field(..., min_length=1, max_length=5000, description="Message body")

    @field_validator("name", "message")
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value
