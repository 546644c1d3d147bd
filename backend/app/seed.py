"""Seed the default admin user if missing. Called from startup or run as a script."""

from __future__ import annotations

from app.config import settings
from app.database import Base, SessionLocal, engine
from app.models.user import User
from app.services.users import seed_admin_if_missing


def seed_all_if_empty() -> User | None:
    """Create the configured admin account. Idempotent; tables must already exist."""
    db = SessionLocal()
    try:
        return seed_admin_if_missing(
            db,
            email=settings.seed_admin_email,
            password=settings.seed_admin_password,
            full_name=settings.seed_admin_name,
        )
    finally:
        db.close()


if __name__ == "__main__":
    import logging

    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    created = seed_all_if_empty()
    if created:
        print(f"Admin user created: {created.email}")
        print("Remember to change the default password!")
    else:
        print("Admin user already exists")
