from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core import validators


def _check(result):
    if not result.valid:
        raise ValueError(result.message)


class RegisterSchema(BaseModel):
    email: str
    password: str = Field(min_length=6)
    fullname: str = Field(min_length=2)
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Literal["buyer", "farmer"] = "buyer"

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        _check(validators.email(value))
        return value.strip().lower()

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        _check(validators.czech_phone(value))
        return value or None


class LoginSchema(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        _check(validators.email(value))
        return value.strip().lower()


class UpdateProfileSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fullname: Optional[str] = Field(default=None, min_length=2)
    phone: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=5)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value):
        _check(validators.czech_phone(value))
        return value
