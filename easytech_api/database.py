"""Database engine construction, sample-data seeding and the storage dependency."""

import logging
from pathlib import Path
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from easytech_api.config import Settings
from easytech_api.models import User
from easytech_api.storage import Storage

# Configure logging
logger = logging.getLogger(__name__)


SAMPLE_SERVICES = [
    {
        "title": "IT Support",
        "description": "Professional IT support for businesses of all sizes. Our team of experts is available 24/7 to help you resolve technical issues quickly and efficiently.",
        "price_from": 99,
        "price_unit": "month",
        "image_url": "/images/it-support.jpg",
        "features": ["24/7 Help Desk", "Remote Support", "On-site Visits", "Preventive Maintenance"],
    },
    {
        "title": "Cloud Solutions",
        "description": "Secure and scalable cloud infrastructure solutions to help your business leverage the power of cloud computing for improved efficiency and reduced costs.",
        "price_from": 199,
        "price_unit": "month",
        "image_url": "/images/cloud-solutions.jpg",
        "features": ["Cloud Migration", "AWS/Azure/GCP", "Private Cloud", "Hybrid Solutions"],
    },
    {
        "title": "Cybersecurity",
        "description": "Comprehensive cybersecurity services to protect your business from evolving threats. We implement robust security measures to safeguard your valuable data.",
        "price_from": 299,
        "price_unit": "month",
        "image_url": "/images/cybersecurity.jpg",
        "features": ["Vulnerability Assessment", "Penetration Testing", "Security Audits", "Incident Response"],
    },
]

_LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Nullam consectetur, "
    "nisl eget eleifend tincidunt, velit urna aliquet elit, nec tempor nisl felis eget "
    "mauris. Phasellus at pharetra dolor. Sed dapibus, nisl eget eleifend tincidunt, "
    "velit urna aliquet elit, nec tempor nisl felis eget mauris..."
)

SAMPLE_BLOG_POSTS = [
    {
        "title": "5 Ways to Improve Your Company's IT Infrastructure",
        "excerpt": "Learn how to optimize your IT infrastructure for better performance, security, and cost-efficiency.",
        "content": _LOREM,
        "category": "Infrastructure",
        "author_name": "Michael Chen",
        "author_avatar": "/images/authors/michael.jpg",
        "publish_date": "2023-05-15",
        "read_time": "5 min",
        "image_url": "/images/blog/it-infrastructure.jpg",
    },
    {
        "title": "The Importance of Regular Security Audits",
        "excerpt": "Regular security audits are essential for identifying vulnerabilities in your systems before they can be exploited.",
        "content": _LOREM,
        "category": "Security",
        "author_name": "Sarah Johnson",
        "author_avatar": "/images/authors/sarah.jpg",
        "publish_date": "2023-06-22",
        "read_time": "7 min",
        "image_url": "/images/blog/security-audit.jpg",
    },
    {
        "title": "Cloud Migration: A Step-by-Step Guide",
        "excerpt": "Moving your business to the cloud? Follow our comprehensive guide to ensure a smooth transition.",
        "content": _LOREM,
        "category": "Cloud",
        "author_name": "David Rodriguez",
        "author_avatar": "/images/authors/david.jpg",
        "publish_date": "2023-07-10",
        "read_time": "10 min",
        "image_url": "/images/blog/cloud-migration.jpg",
    },
]

SAMPLE_TESTIMONIALS = [
    {
        "name": "Jennifer Lee",
        "position": "CTO, Nexus Innovations",
        "content": "EasyTech has transformed how our business handles IT. Their support team is responsive, knowledgeable, and always goes the extra mile to solve our technical challenges.",
        "rating": 5,
        "initials": "JL",
    },
    {
        "name": "Robert Chen",
        "position": "IT Director, Global Logistics",
        "content": "Since partnering with EasyTech for our cloud migration, we've seen significant improvements in our system performance and a 30% reduction in IT costs.",
        "rating": 5,
        "initials": "RC",
    },
    {
        "name": "Maria Santos",
        "position": "CEO, Brightwave Solutions",
        "content": "The cybersecurity team at EasyTech identified vulnerabilities we weren't even aware of. Their proactive approach has given us peace of mind knowing our data is secure.",
        "rating": 5,
        "initials": "MS",
    },
]


def build_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for a database URL.

    For SQLite files the parent directory is created if needed.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Engine: Configured engine
    """
    url = make_url(database_url)
    connect_args = {}

    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False  # Needed for SQLite
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Database URL: {url.render_as_string(hide_password=True)}")
    return create_engine(database_url, connect_args=connect_args)


def seed_sample_data(storage: Storage, settings: Settings) -> bool:
    """
    Insert the admin user and sample content when no user exists yet.

    Creates:
    - An admin user from ADMIN_USERNAME / ADMIN_PASSWORD / ADMIN_EMAIL
    - Three services, three blog posts and three testimonials

    Failures are logged and never propagate, so startup continues with
    whatever data is already present.

    Args:
        storage: Storage to seed
        settings: Application settings holding the admin credentials

    Returns:
        bool: True if sample data was inserted
    """
    # Import here to avoid circular import
    from easytech_api.auth import hash_password

    logger.info("Checking sample data seed...")

    try:
        if storage.count(User) > 0:
            logger.info("Users already present, skipping sample data seed")
            return False

        if not settings.admin_password:
            logger.warning("ADMIN_PASSWORD not configured, skipping sample data seed")
            return False

        storage.create_user({
            "username": settings.admin_username,
            "password_hash": hash_password(settings.admin_password),
            "email": settings.admin_email,
            "role": "admin",
        })
        logger.info(f"Admin user created successfully: {settings.admin_username}")

        for service in SAMPLE_SERVICES:
            storage.create_service(service)
        for post in SAMPLE_BLOG_POSTS:
            storage.create_blog_post(post)
        for testimonial in SAMPLE_TESTIMONIALS:
            storage.create_testimonial(testimonial)

        logger.info(
            f"Seeded {len(SAMPLE_SERVICES)} services, {len(SAMPLE_BLOG_POSTS)} blog posts "
            f"and {len(SAMPLE_TESTIMONIALS)} testimonials"
        )
        return True

    except Exception as e:
        logger.error(f"Failed to seed sample data: {e}")
        return False


def get_storage(request: Request) -> Storage:
    """
    Dependency function to get the application's storage.

    Returns:
        Storage: The storage constructed by create_app
    """
    return request.app.state.storage
