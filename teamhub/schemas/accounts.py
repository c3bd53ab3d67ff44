from pydantic import BaseModel, Field, field_validator

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class EmailBody(BaseModel):
    # stored addresses are lowercase
    email: str = Field(pattern=_EMAIL_PATTERN, max_length=254)

    @field_validator("email")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.strip().lower()


class AccountCreate(EmailBody):
    name: str = Field(min_length=2, max_length=64)


class AccountEdit(AccountCreate):
    pass


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=128)


class ForgotRequest(EmailBody):
    pass


class ResetRequest(EmailBody):
    password: str = Field(min_length=8, max_length=128)
    confirm_password: str = Field(min_length=8, max_length=128)
