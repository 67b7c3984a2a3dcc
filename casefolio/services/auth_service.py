"""
Password hashing and credential checks.
"""

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from casefolio.models.user import User
from casefolio.schemas.user import UserCreate
from casefolio.services.storage import DatabaseStorage

logger = logging.getLogger("casefolio.auth")


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, stored: str) -> bool:
    return check_password_hash(stored, password)


async def register_user(storage: DatabaseStorage, user: UserCreate) -> User:
    """
    Store a user with its password hashed.

    Raises:
        ConstraintViolationError: username already taken
    """
    hashed = user.model_copy(update={"password": hash_password(user.password)})
    return await storage.create_user(hashed)


async def authenticate(storage: DatabaseStorage, username: str, password: str) -> Optional[User]:
    """
    Check credentials.

    Returns:
        The user when the password matches, None otherwise
    """
    user = await storage.get_user_by_username(username)
    if user is None or not verify_password(password, user.password):
        logger.info(f"Failed login for {username}")
        return None

    logger.info(f"Successful login for {username}")
    return user
