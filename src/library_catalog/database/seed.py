"""
Database seeding for the Library Catalog.

Users can only enter the system through here: the catalog has no add-user
operation. Seeding writes ORM rows straight into the session, bypassing the
repositories, and can also put a handful of sample books on the shelf.

Faker generates names; it is seeded so repeated runs produce the same users.
"""

import logging

from faker import Faker
from sqlalchemy.orm import Session

from .schema import Book, User
from .session import safe_commit

logger = logging.getLogger(__name__)

SAMPLE_BOOKS: list[tuple[str, str]] = [
    ("Dune", "Frank Herbert"),
    ("The Left Hand of Darkness", "Ursula K. Le Guin"),
    ("Neuromancer", "William Gibson"),
    ("Foundation", "Isaac Asimov"),
    ("Kindred", "Octavia E. Butler"),
]


def _username_for(fake: Faker, name: str, taken: set[str]) -> str:
    base = "".join(ch for ch in name.split()[0].lower() if ch.isalnum()) or fake.user_name()
    username = base
    while username in taken:
        username = f"{base}{fake.random_int(min=1, max=999)}"
    taken.add(username)
    return username


def seed_users(session: Session, count: int = 10, seed: int | None = 42) -> list[User]:
    """
    Insert ``count`` generated users.

    Args:
        session: Session to write into; committed before returning
        count: Number of users to create
        seed: Faker seed, or None for non-deterministic names

    Returns:
        The created rows, with their assigned ids
    """
    fake = Faker()
    if seed is not None:
        fake.seed_instance(seed)

    taken = {username for (username,) in session.query(User.username).all()}
    users = []
    for _ in range(count):
        name = fake.name()
        users.append(User(name=name, username=_username_for(fake, name, taken)))

    session.add_all(users)
    safe_commit(session, "seed users")
    logger.info("Seeded %d users", len(users))
    return users


def seed_books(session: Session, books: list[tuple[str, str]] | None = None) -> list[Book]:
    """Insert sample books, all available."""
    rows = [
        Book(title=title, author=author, issued=False) for title, author in books or SAMPLE_BOOKS
    ]
    session.add_all(rows)
    safe_commit(session, "seed books")
    logger.info("Seeded %d books", len(rows))
    return rows
