# File: todo_portal/schemas/user.py

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field
from pydantic.networks import validate_email

from todo_portal.models.user import Address


def check_email_format(value: str) -> str:
    # format check only; the submitted string is stored unchanged
    validate_email(value)
    return value


SubmittedEmail = Annotated[str, AfterValidator(check_email_format)]


class AddressSchema(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(default=None, alias="zipCode")
    country: Optional[str] = None

    class Config:
        from_attributes = True
        populate_by_name = True

    def to_model(self) -> Address:
        return Address(**self.model_dump())


class UserBase(BaseModel):
    email: SubmittedEmail


class UserCreate(UserBase):
    password: str
    name: str = Field(min_length=1)
    phone: Optional[str] = None
    address: Optional[AddressSchema] = None


class UserLogin(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserProfileUpdate(BaseModel):
    """Every field is optional; only the ones sent are applied."""

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[SubmittedEmail] = None
    phone: Optional[str] = None
    address: Optional[AddressSchema] = None
    current_password: Optional[str] = Field(default=None, alias="currentPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")

    class Config:
        populate_by_name = True


class AccountDelete(BaseModel):
    password: Optional[str] = None


class UserRead(BaseModel):
    """Public view of a user. The password hash is never part of it."""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[AddressSchema] = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        from_attributes = True  # Pydantic v2: replaces orm_mode
        populate_by_name = True


class AuthResponse(BaseModel):
    message: str
    user: UserRead
    token: str


class UserUpdateResponse(BaseModel):
    message: str
    user: UserRead


class MessageResponse(BaseModel):
    message: str
