"""Database models for EasyTechAPI."""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Float, Boolean, DateTime, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Current UTC time, used for every created_at stamp."""
    return datetime.now(timezone.utc)


class User(Base):
    """User model for authentication."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    email = Column(String, nullable=True)
    role = Column(String(20), default="user", nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class Service(Base):
    """Service offered on the website."""

    __tablename__ = "services"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    price_from = Column(Float, nullable=False)
    price_unit = Column(String, nullable=False)
    image_url = Column(String, nullable=False)
    features = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class BlogPost(Base):
    """Blog post model."""

    __tablename__ = "blog_posts"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    excerpt = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String, nullable=False, index=True)
    author_name = Column(String, nullable=False)
    author_avatar = Column(String, nullable=True)
    publish_date = Column(String, nullable=False)
    read_time = Column(String, nullable=False)
    image_url = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class Testimonial(Base):
    """Customer testimonial."""

    __tablename__ = "testimonials"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    position = Column(String(100), nullable=False)
    content = Column(Text, nullable=False)
    rating = Column(Float, nullable=False)
    initials = Column(String(5), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class ContactSubmission(Base):
    """Message sent through the contact form."""

    __tablename__ = "contact_submissions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    service = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class NewsletterSubscription(Base):
    """Newsletter subscription keyed by email."""

    __tablename__ = "newsletter_subscriptions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String, unique=True, nullable=False, index=True)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class BookingRequest(Base):
    """Booking request made by an authenticated user."""

    __tablename__ = "booking_requests"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    service_id = Column(Integer, nullable=False)
    date = Column(String, nullable=False)
    time = Column(String, nullable=False)
    notes = Column(Text, nullable=True)
    status = Column(String(20), default="pending", nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


class RevokedSession(Base):
    """Session token ended by logout, keyed by its jti claim."""

    __tablename__ = "revoked_sessions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    jti = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
