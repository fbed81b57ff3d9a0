"""HTTP route definitions for the user service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request, status

from user_schemas import (
    CreateUserRequest,
    LoginUserRequest,
    UpdateUserRequest,
    UserAuthStatus,
    UserLoginResponse,
    UserResponse,
)

from ..domain.account import Account
from ..domain.contracts import CreateAccountInput, LoginInput, UpdateAccountInput
from ..domain.service import AccountService
from ..security.bearer import BearerAuthenticator

router = APIRouter(prefix="/v1/users", tags=["users"])


def to_response(account: Account) -> UserResponse:
    """Build a response model from the domain aggregate."""
    return UserResponse(
        id=account.id,
        username=account.username,
        email=account.email,
        role=account.role.value,
        active=account.active,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


def get_service(request: Request) -> AccountService:
    """Resolve the `AccountService` stored on the FastAPI application state."""
    service: AccountService = request.app.state.account_service
    return service


def get_authenticator(request: Request) -> BearerAuthenticator:
    authenticator: BearerAuthenticator = request.app.state.authenticator
    return authenticator


def get_current_account(
    authorization: str | None = Header(default=None),
    authenticator: BearerAuthenticator = Depends(get_authenticator),
) -> Account:
    """Resolve the bearer token on the request to an active account."""
    return authenticator.validate(authorization)


@router.post("/login", response_model=UserLoginResponse)
def login(
    payload: LoginUserRequest,
    service: AccountService = Depends(get_service),
) -> UserLoginResponse:
    """Exchange email and password for a signed token."""
    result = service.login(LoginInput(email=payload.email, password=payload.password))
    return UserLoginResponse(user=to_response(result.user), token=result.token)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: CreateUserRequest,
    service: AccountService = Depends(get_service),
) -> UserResponse:
    account = service.create_account(
        CreateAccountInput(
            username=payload.username,
            email=payload.email,
            password=payload.password,
        )
    )
    return to_response(account)


@router.get("", response_model=list[UserResponse])
def list_users(service: AccountService = Depends(get_service)) -> list[UserResponse]:
    return [to_response(account) for account in service.list_accounts()]


@router.get("/check-status", response_model=UserAuthStatus)
def check_auth_status(
    account: Account = Depends(get_current_account),
    service: AccountService = Depends(get_service),
) -> UserAuthStatus:
    """Return a fresh token for the caller identified by the bearer token."""
    status_ = service.check_auth_status(account)
    return UserAuthStatus(email=status_.email, username=status_.username, token=status_.token)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, service: AccountService = Depends(get_service)) -> UserResponse:
    return to_response(service.get_account(user_id))


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    payload: UpdateUserRequest,
    service: AccountService = Depends(get_service),
) -> UserResponse:
    """Apply the supplied fields; fields left out of the body are not touched."""
    supplied = payload.model_dump(exclude_unset=True, exclude_none=True)
    account = service.update_account(user_id, UpdateAccountInput(**supplied))
    return to_response(account)


@router.delete("/{user_id}", response_model=UserResponse)
def remove_user(user_id: str, service: AccountService = Depends(get_service)) -> UserResponse:
    """Soft-delete a user by clearing its ``active`` flag."""
    return to_response(service.soft_delete(user_id))
