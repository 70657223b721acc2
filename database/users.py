"""
Users table access.

Users are seeded from a YAML fixture at startup. The fixture is a list of
model blocks:

    - model: User
      rows:
        - id: 1
          name: alice
          state: 3f9c...
          whitelisted: true

Only the lookup the access gate needs and the upsert the loader needs live
here; account management happens elsewhere.
"""

import os
from dataclasses import dataclass
from typing import Optional

import yaml

import config
from database.core import get_db_connection, initialize_database
from utils.logging_config import get_logger

logger = get_logger('Users')


@dataclass
class User:
    id: int
    name: str
    state: str
    whitelisted: bool = False

    def __str__(self):
        return f"User<{self.name}, {self.id}, {self.whitelisted}>"


def _row_to_user(row) -> User:
    return User(
        id=row['id'],
        name=row['name'],
        state=row['state'],
        whitelisted=bool(row['whitelisted']),
    )


def get_user_by_state(state: str) -> Optional[User]:
    """Find the user whose session state matches, or None."""
    if not state:
        return None
    with get_db_connection() as conn:
        row = conn.execute(
            "SELECT id, name, state, whitelisted FROM users WHERE state = ?", (state,)
        ).fetchone()
    if row is None:
        logger.info("No user matches the presented session state")
        return None
    return _row_to_user(row)


def upsert_user(user: User):
    """Insert a user, or overwrite the existing user with the same id."""
    with get_db_connection() as conn:
        conn.execute("""
            INSERT INTO users (id, name, state, whitelisted) VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                state = excluded.state,
                whitelisted = excluded.whitelisted
        """, (user.id, user.name, user.state, int(user.whitelisted)))
        conn.commit()


def count_users() -> int:
    with get_db_connection() as conn:
        return conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]


def _parse_fixture(path: str):
    with open(path, 'r') as f:
        blocks = yaml.safe_load(f) or []

    if not isinstance(blocks, list):
        raise ValueError(f"{path}: expected a list of model blocks")

    users = []
    for block in blocks:
        if not isinstance(block, dict) or block.get('model') != 'User':
            continue
        for row in block.get('rows') or []:
            users.append(User(
                id=int(row['id']),
                name=str(row.get('name', '')),
                state=str(row['state']),
                whitelisted=bool(row.get('whitelisted', False)),
            ))
    return users


def load_users_fixture(path: str = None, sample_path: str = None) -> int:
    """
    Recreate the users table from the YAML fixture.

    Falls back to the sample fixture when the primary one is missing or
    invalid. Errors from the sample fixture propagate.

    Returns:
        Number of users loaded
    """
    path = path or config.USERS_FIXTURE
    sample_path = sample_path or config.SAMPLE_USERS_FIXTURE

    try:
        users = _parse_fixture(path)
    except (OSError, ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        if os.path.abspath(path) == os.path.abspath(sample_path):
            raise
        logger.warning(f"Could not load users from {path} ({e}), using {sample_path}")
        users = _parse_fixture(sample_path)

    initialize_database(recreate=True)
    for user in users:
        upsert_user(user)

    logger.info(f"Loaded {len(users)} user(s)")
    return len(users)
