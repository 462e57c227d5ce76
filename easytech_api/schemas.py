"""Pydantic schemas for request and response validation."""

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional
from pydantic import AfterValidator, AnyUrl, BaseModel, EmailStr, Field, TypeAdapter, ValidationError, field_validator
from pydantic.alias_generators import to_camel


BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]

_url_adapter = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    # Validate only; the caller's spelling is what gets stored
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        raise ValueError('Input should be a valid URL')
    return value


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; every stored timestamp is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UrlString = Annotated[str, AfterValidator(_check_url)]
UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Auth Schemas
class UserCreate(CamelModel):
    """Schema for user registration request."""

    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=100)
    email: Optional[EmailStr] = None


class UserLogin(CamelModel):
    """Schema for user login request."""

    username: str
    password: str

    @field_validator('username')
    @classmethod
    def username_not_empty(cls, v: str) -> str:
        """Validate that username is not empty."""
        if not v or not v.strip():
            raise ValueError('Username cannot be empty')
        return v

    @field_validator('password')
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        """Validate that password is not empty."""
        if not v or not v.strip():
            raise ValueError('Password cannot be empty')
        return v


class UserRead(CamelModel):
    """Public view of a user. Never carries the password hash."""

    id: int
    username: str
    email: Optional[str] = None
    role: str
    created_at: UtcDatetime


# Service Schemas
class ServiceCreate(CamelModel):
    """Schema for service creation request."""

    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10)
    price_from: float = Field(gt=0, strict=True)
    price_unit: str
    image_url: UrlString
    features: List[str] = Field(default_factory=list)


class ServiceRead(CamelModel):
    id: int
    title: str
    description: str
    price_from: float
    price_unit: str
    image_url: str
    features: List[str]
    created_at: UtcDatetime


# Blog Post Schemas
class BlogPostCreate(CamelModel):
    """Schema for blog post creation request."""

    title: str = Field(min_length=3, max_length=100)
    excerpt: str = Field(min_length=10, max_length=200)
    content: str = Field(min_length=50)
    category: str
    author_name: str
    author_avatar: Optional[str] = None
    publish_date: str
    read_time: str
    image_url: UrlString


class BlogPostRead(CamelModel):
    id: int
    title: str
    excerpt: str
    content: str
    category: str
    author_name: str
    author_avatar: Optional[str] = None
    publish_date: str
    read_time: str
    image_url: str
    created_at: UtcDatetime


# Testimonial Schemas
class TestimonialCreate(CamelModel):
    """Schema for testimonial creation request."""

    name: str = Field(min_length=2, max_length=100)
    position: str = Field(max_length=100)
    content: str = Field(min_length=10)
    rating: float = Field(ge=1, le=5, strict=True)
    initials: str = Field(max_length=5)


class TestimonialRead(CamelModel):
    id: int
    name: str
    position: str
    content: str
    rating: float
    initials: str
    created_at: UtcDatetime


# Contact Schemas
class ContactCreate(CamelModel):
    """Schema for contact form submission."""

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = None
    service: str
    message: str = Field(min_length=10)


class ContactSubmissionRead(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    service: str
    message: str
    created_at: UtcDatetime


# Newsletter Schemas
class NewsletterSubscribe(CamelModel):
    """Schema for newsletter subscription request."""

    email: EmailStr


class NewsletterSubscriptionRead(CamelModel):
    id: int
    email: str
    active: bool
    created_at: UtcDatetime


# Booking Schemas
class BookingCreate(CamelModel):
    """
    Schema for booking request body.

    The owning user comes from the session, so any userId sent by the
    client is ignored.
    """

    service_id: int = Field(gt=0, strict=True)
    date: str
    time: str
    notes: Optional[str] = None


class BookingRead(CamelModel):
    id: int
    user_id: int
    service_id: int
    date: str
    time: str
    notes: Optional[str] = None
    status: BookingStatus
    created_at: UtcDatetime
