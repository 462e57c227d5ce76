"""Storage layer: single point of access to every persisted collection."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Type
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from easytech_api.models import (
    Base,
    User,
    Service,
    BlogPost,
    Testimonial,
    ContactSubmission,
    NewsletterSubscription,
    BookingRequest,
    RevokedSession,
    utcnow,
)

# Configure logging
logger = logging.getLogger(__name__)

# Fields the storage layer owns; caller-supplied values are discarded.
GENERATED_FIELDS = ("id", "created_at")


class StorageError(Exception):
    """Raised when the database cannot complete an operation."""


class RecordNotFoundError(StorageError):
    """Raised when an update targets an id that does not exist."""


class DuplicateRecordError(StorageError):
    """Raised when a write violates a uniqueness constraint."""


class Storage:
    """
    Typed CRUD access to the EasyTech collections.

    Owns id assignment (the database's autoincrement sequence) and the
    default fields stamped on every insert. Each call runs in its own
    short-lived session.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )

    def init_schema(self) -> None:
        """Create all tables that do not exist yet."""
        logger.info("Initializing database tables...")
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created successfully")

    def close(self) -> None:
        """Release every pooled connection."""
        logger.info("Disposing database engine")
        self.engine.dispose()

    # Generic operations

    def _get(self, model: Type[Base], record_id: int):
        db = self.session_factory()
        try:
            return db.get(model, record_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch {model.__tablename__} {record_id}: {e}")
            raise StorageError(str(e)) from e
        finally:
            db.close()

    def _find(self, model: Type[Base], *criteria, order_by=None, limit: Optional[int] = None) -> List[Any]:
        query = select(model).where(*criteria)
        query = query.order_by(*(order_by or (model.id,)))
        if limit is not None:
            query = query.limit(limit)

        db = self.session_factory()
        try:
            return list(db.scalars(query).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to query {model.__tablename__}: {e}")
            raise StorageError(str(e)) from e
        finally:
            db.close()

    def _find_one(self, model: Type[Base], *criteria):
        results = self._find(model, *criteria, limit=1)
        return results[0] if results else None

    def _create(self, model: Type[Base], data: Dict[str, Any]):
        values = {k: v for k, v in data.items() if k not in GENERATED_FIELDS}
        values["created_at"] = utcnow()
        record = model(**values)

        db = self.session_factory()
        try:
            db.add(record)
            db.commit()
            db.refresh(record)
            logger.debug(f"Created {model.__tablename__} {record.id}")
            return record
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Duplicate {model.__tablename__} rejected: {e.orig}")
            raise DuplicateRecordError(str(e.orig)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to create {model.__tablename__}: {e}")
            raise StorageError(str(e)) from e
        finally:
            db.close()

    def _update(self, model: Type[Base], record_id: int, data: Dict[str, Any]):
        db = self.session_factory()
        try:
            record = db.get(model, record_id)
            if record is None:
                raise RecordNotFoundError(f"{model.__tablename__} {record_id} not found")

            for key, value in data.items():
                if key in GENERATED_FIELDS:
                    continue
                setattr(record, key, value)

            db.commit()
            db.refresh(record)
            logger.debug(f"Updated {model.__tablename__} {record_id}")
            return record
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Duplicate {model.__tablename__} rejected: {e.orig}")
            raise DuplicateRecordError(str(e.orig)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to update {model.__tablename__} {record_id}: {e}")
            raise StorageError(str(e)) from e
        finally:
            db.close()

    def count(self, model: Type[Base]) -> int:
        """Number of records in a collection."""
        db = self.session_factory()
        try:
            return db.scalar(select(func.count()).select_from(model))
        except SQLAlchemyError as e:
            logger.error(f"Failed to count {model.__tablename__}: {e}")
            raise StorageError(str(e)) from e
        finally:
            db.close()

    # Users

    def get_user(self, user_id: int) -> Optional[User]:
        return self._get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._find_one(User, User.username == username)

    def list_users(self) -> List[User]:
        return self._find(User)

    def create_user(self, data: Dict[str, Any]) -> User:
        return self._create(User, data)

    def update_user(self, user_id: int, data: Dict[str, Any]) -> User:
        return self._update(User, user_id, data)

    # Services

    def get_service(self, service_id: int) -> Optional[Service]:
        return self._get(Service, service_id)

    def list_services(self) -> List[Service]:
        return self._find(Service)

    def create_service(self, data: Dict[str, Any]) -> Service:
        return self._create(Service, data)

    def update_service(self, service_id: int, data: Dict[str, Any]) -> Service:
        return self._update(Service, service_id, data)

    # Blog posts

    def get_blog_post(self, post_id: int) -> Optional[BlogPost]:
        return self._get(BlogPost, post_id)

    def list_blog_posts(self) -> List[BlogPost]:
        return self._find(BlogPost)

    def get_related_blog_posts(self, post_id: int, limit: int = 3) -> List[BlogPost]:
        """
        Posts sharing the category of the given post, excluding the post itself.

        Args:
            post_id: Source blog post ID
            limit: Maximum number of posts returned

        Returns:
            List[BlogPost]: Related posts, empty if the source post does not exist
        """
        post = self.get_blog_post(post_id)
        if post is None:
            return []
        return self._find(
            BlogPost,
            BlogPost.category == post.category,
            BlogPost.id != post.id,
            limit=limit,
        )

    def create_blog_post(self, data: Dict[str, Any]) -> BlogPost:
        return self._create(BlogPost, data)

    def update_blog_post(self, post_id: int, data: Dict[str, Any]) -> BlogPost:
        return self._update(BlogPost, post_id, data)

    # Testimonials

    def get_testimonial(self, testimonial_id: int) -> Optional[Testimonial]:
        return self._get(Testimonial, testimonial_id)

    def list_testimonials(self) -> List[Testimonial]:
        return self._find(Testimonial)

    def create_testimonial(self, data: Dict[str, Any]) -> Testimonial:
        return self._create(Testimonial, data)

    def update_testimonial(self, testimonial_id: int, data: Dict[str, Any]) -> Testimonial:
        return self._update(Testimonial, testimonial_id, data)

    # Contact submissions

    def get_contact_submission(self, submission_id: int) -> Optional[ContactSubmission]:
        return self._get(ContactSubmission, submission_id)

    def list_contact_submissions(self) -> List[ContactSubmission]:
        return self._find(ContactSubmission)

    def create_contact_submission(self, data: Dict[str, Any]) -> ContactSubmission:
        return self._create(ContactSubmission, data)

    def update_contact_submission(self, submission_id: int, data: Dict[str, Any]) -> ContactSubmission:
        return self._update(ContactSubmission, submission_id, data)

    # Newsletter subscriptions

    def get_newsletter_subscription(self, subscription_id: int) -> Optional[NewsletterSubscription]:
        return self._get(NewsletterSubscription, subscription_id)

    def get_newsletter_subscription_by_email(self, email: str) -> Optional[NewsletterSubscription]:
        return self._find_one(NewsletterSubscription, NewsletterSubscription.email == email)

    def list_newsletter_subscriptions(self) -> List[NewsletterSubscription]:
        return self._find(NewsletterSubscription)

    def create_newsletter_subscription(self, data: Dict[str, Any]) -> NewsletterSubscription:
        # New subscriptions always start active
        return self._create(NewsletterSubscription, {**data, "active": True})

    def update_newsletter_subscription(self, subscription_id: int, data: Dict[str, Any]) -> NewsletterSubscription:
        return self._update(NewsletterSubscription, subscription_id, data)

    # Booking requests

    def get_booking_request(self, booking_id: int) -> Optional[BookingRequest]:
        return self._get(BookingRequest, booking_id)

    def list_booking_requests(self) -> List[BookingRequest]:
        return self._find(BookingRequest)

    def list_bookings_by_user(self, user_id: int) -> List[BookingRequest]:
        """Bookings owned by a user, most recent first."""
        return self._find(
            BookingRequest,
            BookingRequest.user_id == user_id,
            order_by=(BookingRequest.created_at.desc(), BookingRequest.id.desc()),
        )

    def create_booking_request(self, user_id: int, data: Dict[str, Any]) -> BookingRequest:
        return self._create(
            BookingRequest, {**data, "user_id": user_id, "status": "pending"}
        )

    def update_booking_request(self, booking_id: int, data: Dict[str, Any]) -> BookingRequest:
        return self._update(BookingRequest, booking_id, data)

    # Revoked sessions

    def revoke_session(self, jti: str, expires_at: datetime) -> None:
        """Record that the session token with this jti was ended by logout."""
        try:
            self._create(RevokedSession, {"jti": jti, "expires_at": expires_at})
        except DuplicateRecordError:
            logger.debug(f"Session {jti} already revoked")

    def is_session_revoked(self, jti: str) -> bool:
        return self._find_one(RevokedSession, RevokedSession.jti == jti) is not None
