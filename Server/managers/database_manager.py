"""
GreenPlan Server - Database Manager

This module manages the database engine, connection pool, schema
initialization, transactional sessions and password hashing.
"""

import logging
import secrets
import string
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import bcrypt
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from exceptions import GreenPlanError, InternalError
from models.database import Base, User

logger = logging.getLogger(__name__)


def _EnableSqliteForeignKeys(dbapi_connection, connection_record):
    """SQLite ignores foreign keys unless enabled per connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Manages database connection, initialization, and operations
    """

    def __init__(
        self,
        database_url: str = "sqlite:///database/greenplan.db",
        pool_size: int = 10,
        ssl_ca: Optional[str] = None,
        bcrypt_rounds: int = 10
    ):
        """
        Initialize database manager

        Args:
            database_url: SQLAlchemy database URL
            pool_size: Number of pooled connections for server databases
            ssl_ca: Path to a CA certificate for MySQL connections
            bcrypt_rounds: bcrypt cost factor for new password hashes
        """
        self.database_url = database_url
        self.bcrypt_rounds = bcrypt_rounds

        url = make_url(database_url)
        engine_kwargs = {"echo": False}

        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if not url.database or url.database == ":memory:":
                # In-memory databases live in a single shared connection
                engine_kwargs["poolclass"] = StaticPool
            else:
                # Ensure database directory exists
                db_dir = Path(url.database).parent
                if db_dir and str(db_dir) != '.':
                    db_dir.mkdir(parents=True, exist_ok=True)
        else:
            # Fixed-size pool; callers wait for a free connection instead of failing
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=0,
                pool_timeout=None,
                pool_pre_ping=True
            )
            if url.get_backend_name() == "mysql":
                engine_kwargs["connect_args"] = self._MysqlSslArgs(ssl_ca)

        self.engine = create_engine(url, **engine_kwargs)

        if url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _EnableSqliteForeignKeys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    @staticmethod
    def _MysqlSslArgs(ssl_ca: Optional[str]) -> dict:
        """
        Build MySQL connect arguments for TLS

        Args:
            ssl_ca: Path to the CA certificate

        Returns:
            dict: connect_args for the PyMySQL driver
        """
        if ssl_ca and Path(ssl_ca).exists():
            logger.info(f"SSL certificate found and loaded from {ssl_ca}")
            return {"ssl": {"ca": ssl_ca}}

        logger.warning("CA certificate not found, connecting without a specific SSL CA")
        return {}

    def InitializeDatabase(self) -> None:
        """
        Initialize the database with all tables
        Creates tables if they don't exist
        """
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema initialized")

    def Dispose(self) -> None:
        """Close all pooled connections"""
        self.engine.dispose()

    def Ping(self) -> bool:
        """
        Check that a pooled connection can reach the database

        Returns:
            bool: True if a trivial query succeeded
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    def GetSession(self) -> Session:
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()

    @contextmanager
    def SessionScope(
        self,
        failure_message: str = "Server error",
        integrity_error: Optional[GreenPlanError] = None
    ) -> Iterator[Session]:
        """
        Run a block of work in a single transaction

        Commits when the block completes, rolls back on any error.
        Application errors propagate unchanged. Any other error is logged
        and replaced by an InternalError carrying failure_message, except
        integrity violations which become integrity_error when given.

        Args:
            failure_message: Message returned to the caller on storage failure
            integrity_error: Error to raise instead when a constraint is violated

        Yields:
            Session: SQLAlchemy session bound to the transaction
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except GreenPlanError:
            session.rollback()
            raise
        except IntegrityError as e:
            session.rollback()
            if integrity_error is not None:
                logger.warning(f"Integrity violation: {str(e.orig)}")
                raise integrity_error from e
            logger.exception(failure_message)
            raise InternalError(failure_message) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception(failure_message)
            raise InternalError(failure_message) from e
        except Exception as e:
            # Driver errors outside SQLAlchemy's hierarchy (e.g. OverflowError from sqlite3)
            session.rollback()
            logger.exception(failure_message)
            raise InternalError(failure_message) from e
        finally:
            session.close()

    # ==================== Accounts ====================

    def EnsureAdminAccount(self, username: str = "admin") -> Optional[str]:
        """
        Create a default admin account if no admin exists yet

        Args:
            username: Username for the new admin account

        Returns:
            str: Generated admin password if the account was created, None otherwise
        """
        with self.SessionScope("Server error creating admin account") as session:
            admin_exists = session.query(User.id).filter(User.role == "admin").first()
            if admin_exists:
                return None

            if session.query(User.id).filter(User.username == username).first():
                logger.warning(f"Cannot create default admin: username '{username}' is taken")
                return None

            admin_password = self.GenerateRandomPassword()
            session.add(User(
                username=username,
                password_hash=self.HashPassword(admin_password),
                role="admin"
            ))

        logger.info(f"Created default admin user '{username}'")
        return admin_password

    @staticmethod
    def GenerateRandomPassword(length: int = 12) -> str:
        """
        Generate a secure random password

        Args:
            length: Password length (default 12)

        Returns:
            str: Generated password
        """
        # Use a mix of uppercase, lowercase, digits, and special characters
        alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
        password = ''.join(secrets.choice(alphabet) for _ in range(length))
        return password

    def HashPassword(self, password: str) -> str:
        """
        Hash a password using bcrypt
        Truncates to 72 bytes to comply with bcrypt's maximum password length

        Args:
            password: Plain text password

        Returns:
            str: Hashed password (as string)
        """
        password_bytes = password.encode('utf-8')[:72]

        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        hashed = bcrypt.hashpw(password_bytes, salt)

        # Return as string for database storage
        return hashed.decode('utf-8')

    @staticmethod
    def VerifyPassword(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash
        Truncates to 72 bytes to comply with bcrypt's maximum password length

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored password hash (as string)

        Returns:
            bool: True if password matches, False otherwise
        """
        password_bytes = plain_password.encode('utf-8')[:72]
        hashed_bytes = hashed_password.encode('utf-8')

        return bcrypt.checkpw(password_bytes, hashed_bytes)
