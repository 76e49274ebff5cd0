"""
API dependencies for dependency injection
"""

from typing import Any, Callable, Generator, Optional
from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from adapters.identity_adapter import AuthenticatedUser, JWTIdentityProvider
from app.config import settings
from app.exceptions import InvalidInputError
from domain.models import get_db_session
from services.macro_estimator import MacroEstimator


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_identity_provider(request: Request) -> JWTIdentityProvider:
    """Identity provider built at startup, or on first use outside the lifespan."""
    provider = getattr(request.app.state, "identity_provider", None)
    if provider is None:
        provider = JWTIdentityProvider.from_settings(settings)
        request.app.state.identity_provider = provider
    return provider


def get_macro_estimator_factory(request: Request) -> Callable[[], MacroEstimator]:
    """
    Factory for the macro estimator built at startup.

    Outside the lifespan the estimator is built on the first call, so a
    missing credential only surfaces once a submission has been validated.
    """
    state = request.app.state

    def factory() -> MacroEstimator:
        estimator = getattr(state, "macro_estimator", None)
        if estimator is None:
            estimator = MacroEstimator.from_settings(settings)
            state.macro_estimator = estimator
        return estimator

    return factory


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    provider: JWTIdentityProvider = Depends(get_identity_provider),
) -> AuthenticatedUser:
    """Resolve the caller; raises UnauthenticatedError (401) when there is none."""
    return provider.get_current_user(authorization)


async def read_meal_payload(
    request: Request, user: AuthenticatedUser = Depends(get_current_user)
) -> Any:
    """
    Read the raw JSON body of a meal submission.

    Depends on the caller so that unauthenticated requests are refused before
    the body is looked at.
    """
    try:
        return await request.json()
    except ValueError as e:
        raise InvalidInputError("Request body must be valid JSON") from e
