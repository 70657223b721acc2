from .core import get_db_connection, initialize_database
from .users import User, get_user_by_state, upsert_user, load_users_fixture, count_users

__all__ = [
    'get_db_connection',
    'initialize_database',
    'User',
    'get_user_by_state',
    'upsert_user',
    'load_users_fixture',
    'count_users',
]
