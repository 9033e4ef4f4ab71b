"""
GreenPlan Server - User Manager

Registration and credential checks against the users table.
"""

import logging
from typing import Optional

from authorization import VALID_ROLES
from exceptions import InvalidInputError
from managers.database_manager import DatabaseManager
from models.auth import Identity
from models.database import User

logger = logging.getLogger(__name__)


class UserManager:
    """
    Manages user accounts (the credential store)
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    def RegisterUser(
        self,
        username: Optional[str],
        password: Optional[str],
        confirm_password: Optional[str],
        role: Optional[str]
    ) -> int:
        """
        Register a new user

        Every rule is checked before anything is written, so a rejected
        registration never leaves a partial row.

        Args:
            username: Requested username
            password: Plain text password
            confirm_password: Must equal password
            role: 'user' or 'admin'

        Returns:
            int: ID of the new user

        Raises:
            InvalidInputError: If a field is missing, passwords differ, the role
                               is invalid, or the username is taken
        """
        username = username.strip() if username else username
        if not username or not password or not confirm_password or not role:
            raise InvalidInputError("All fields are required")

        if password != confirm_password:
            raise InvalidInputError("Passwords do not match")

        if role not in VALID_ROLES:
            raise InvalidInputError("Invalid role")

        with self.db_manager.SessionScope(
            "Server error during registration",
            integrity_error=InvalidInputError("Username already exists")
        ) as session:
            # Check if username exists
            existing_user = session.query(User.id).filter(User.username == username).first()
            if existing_user:
                raise InvalidInputError("Username already exists")

            new_user = User(
                username=username,
                password_hash=self.db_manager.HashPassword(password),
                role=role
            )
            session.add(new_user)
            session.flush()  # Flush to get the user id
            user_id = new_user.id

        logger.info(f"Registered user '{username}' with role '{role}'")
        return user_id

    def AuthenticateUser(self, username: str, password: str) -> Optional[Identity]:
        """
        Authenticate a user with username and password

        Unknown users and wrong passwords give the same result. The
        username is stripped the same way as at registration.

        Args:
            username: Username
            password: Plain text password

        Returns:
            Identity: Identity of the user if authentication succeeded, None otherwise
        """
        username = username.strip()

        with self.db_manager.SessionScope("Server error during login") as session:
            user = session.query(User).filter(User.username == username).first()

            if not user:
                return None

            if not self.db_manager.VerifyPassword(password, user.password_hash):
                return None

            return Identity(id=user.id, username=user.username, role=user.role)
