"""
GreenPlan Server - Authentication Endpoints

This module contains account endpoints: registration and login.
"""

import logging
from fastapi import APIRouter, Depends, status

from auth import TOKEN_LIFETIME, GetTokenCodec, TokenCodec
from database import GetUserManager
from exceptions import UnauthenticatedError
from managers import UserManager
from models.api import MessageResponse
from models.auth import LoginRequest, LoginResponse, RegisterRequest


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


# ==================== Authentication Endpoints ====================

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED, tags=["Authentication"])
def register(
    register_request: RegisterRequest,
    users: UserManager = Depends(GetUserManager)
):
    """
    Register a new account

    Args:
        register_request: username, password, confirmPassword and role

    Returns:
        MessageResponse: Confirmation message

    Raises:
        InvalidInputError: If a field is missing, passwords differ, the role is
                           invalid or the username is taken
    """
    users.RegisterUser(
        register_request.username,
        register_request.password,
        register_request.confirm_password,
        register_request.role
    )
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse, tags=["Authentication"])
def login(
    login_request: LoginRequest,
    users: UserManager = Depends(GetUserManager),
    token_codec: TokenCodec = Depends(GetTokenCodec)
):
    """
    Authenticate user and return a session token

    Args:
        login_request: Username and password

    Returns:
        LoginResponse: Token, role, username and token lifetime

    Raises:
        UnauthenticatedError: If credentials are invalid
    """
    identity = users.AuthenticateUser(login_request.username, login_request.password)

    if identity is None:
        logger.warning(f"Failed login attempt for username '{login_request.username}'")
        raise UnauthenticatedError("Invalid credentials")

    token = token_codec.Issue(identity)

    logger.info(f"User '{identity.username}' logged in successfully")

    return LoginResponse(
        token=token,
        role=identity.role,
        username=identity.username,
        expires_in=int(TOKEN_LIFETIME.total_seconds())
    )
