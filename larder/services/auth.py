"""Sign-in, sign-up, sign-out and profile lookup."""

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from larder.core.errors import (
    AuthenticationError,
    ConflictError,
    INVALID_TOKEN_MESSAGE,
    InvalidCredentialsError,
    NotFoundError,
)
from larder.core.security import decode_token, hash_password, verify_password
from larder.models import ROLE_USER, TokenType
from larder.repositories import roles as role_store
from larder.repositories import tokens as token_store
from larder.repositories import users as user_store
from larder.repositories.users import UserWithRoles
from larder.schemas.auth import (
    RoleOut,
    SignInData,
    SignInRequest,
    SignOutRequest,
    SignUpRequest,
    UserOut,
)
from larder.services.tokens import insert_token, issue_token_pair

if TYPE_CHECKING:
    from larder.core.config import Settings

logger = logging.getLogger(__name__)

SIGN_IN_ERROR_MESSAGE = "Oops, your email or password doesn't match our records"
DUPLICATE_EMAIL_MESSAGE = "Oops, user with email you filled already exists"
USER_NOT_FOUND_MESSAGE = "Oops, user not found"


def to_user_out(user: UserWithRoles) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        roles=[RoleOut(id=role.id, name=role.name) for role in user.roles],
    )


def sign_in(
    db: Session, body: SignInRequest, settings: "Settings | None" = None
) -> SignInData:
    """
    Check credentials and issue a persisted token pair.

    Unknown email and wrong password produce the same 400 so the response does not
    reveal which accounts exist.
    """
    user = user_store.get_by_email(db, body.email)
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Sign-in failed")
        raise InvalidCredentialsError(SIGN_IN_ERROR_MESSAGE)

    pair = issue_token_pair(user.id, settings)
    insert_token(db, user.id, pair.access_token, pair.refresh_token)

    profile = user_store.get_user_with_roles(db, user.id)
    if profile is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    logger.info("Signed in user_id=%s", user.id)
    return SignInData(
        user=to_user_out(profile),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


def sign_up(
    db: Session, body: SignUpRequest, settings: "Settings | None" = None
) -> UserOut:
    """
    Create an account with the USER role. The role row is created on first use;
    a duplicate email is reported from the unique constraint as a 400.
    """
    rounds = settings.BCRYPT_ROUNDS if settings is not None else None
    password_hash = hash_password(body.password, rounds)

    try:
        role = role_store.upsert_role(db, ROLE_USER)
        db.commit()
    except Exception:
        db.rollback()
        raise

    try:
        user = user_store.create_user(
            db,
            name=body.name,
            email=body.email,
            password_hash=password_hash,
            role_ids=[role.id],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Sign-up rejected: email already registered")
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from None
    except Exception:
        db.rollback()
        raise

    profile = user_store.get_user_with_roles(db, user.id)
    if profile is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    logger.info("Signed up user_id=%s", user.id)
    return to_user_out(profile)


def sign_out(
    db: Session,
    user_id: str,
    body: SignOutRequest,
    settings: "Settings | None" = None,
) -> None:
    """
    Revoke the caller's access/refresh pair.

    Both tokens must verify, must belong to user_id (the bearer identity), and must
    still be live rows. Both rows are deleted in one transaction or not at all.
    """
    access_claims = decode_token(body.access_token, TokenType.ACCESS, settings)
    refresh_claims = decode_token(body.refresh_token, TokenType.REFRESH, settings)

    if access_claims["id"] != user_id or refresh_claims["id"] != user_id:
        logger.info("Sign-out rejected: tokens do not belong to user_id=%s", user_id)
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    now = datetime.now(UTC)
    access_row = token_store.find_live_token(
        db, user_id, TokenType.ACCESS, body.access_token, now
    )
    refresh_row = token_store.find_live_token(
        db, user_id, TokenType.REFRESH, body.refresh_token, now
    )
    if access_row is None or refresh_row is None:
        logger.info("Sign-out rejected: token not live for user_id=%s", user_id)
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    try:
        deleted = token_store.delete_token_pair(
            db, user_id, body.access_token, body.refresh_token
        )
        if deleted != 2:
            # A concurrent sign-out, refresh or sweep removed one of them first.
            db.rollback()
            raise AuthenticationError(INVALID_TOKEN_MESSAGE)
        db.commit()
    except AuthenticationError:
        raise
    except Exception:
        db.rollback()
        raise
    logger.info("Signed out user_id=%s", user_id)


def me(db: Session, user_id: str) -> UserOut:
    """Profile of the authenticated user; 404 if the account was removed meanwhile."""
    profile = user_store.get_user_with_roles(db, user_id)
    if profile is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return to_user_out(profile)
