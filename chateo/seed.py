"""Seed demo users.

Usage: python -m chateo.seed
"""
import logging
from typing import Iterable, Mapping, Optional
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from .database import engine as default_engine, create_db_and_tables
from .db.models import User

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"phone_number": "+1234567001", "first_name": "Alice", "last_name": "Johnson"},
    {"phone_number": "+1234567002", "first_name": "Bob", "last_name": "Smith"},
    {"phone_number": "+1234567003", "first_name": "Charlie", "last_name": "Brown"},
    {"phone_number": "+1234567004", "first_name": "Diana", "last_name": "Lee"},
    {"phone_number": "+1234567005", "first_name": "Ethan", "last_name": "Garcia"},
    {"phone_number": "+1234567006", "first_name": "Fiona", "last_name": "Chen"},
    {"phone_number": "+1234567007", "first_name": "George", "last_name": "Kim"},
    {"phone_number": "+1234567008", "first_name": "Hannah", "last_name": "Patel"},
    {"phone_number": "+1234567009", "first_name": "Isaac", "last_name": "Nguyen"},
    {"phone_number": "+1234567010", "first_name": "Julia", "last_name": "Martinez"},
]


def seed_users(engine: Optional[Engine] = None, users: Iterable[Mapping[str, str]] = DEMO_USERS) -> int:
    """Insert users whose phone number is not taken yet; returns how many were created."""
    engine = engine or default_engine
    create_db_and_tables(engine)
    created = 0
    with Session(engine) as session:
        for data in users:
            existing = session.exec(select(User).where(User.phone_number == data["phone_number"])).first()
            if existing:
                continue
            session.add(User(**data))
            created += 1
        session.commit()
    logger.info(f"Seeded {created} users")
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_users()
