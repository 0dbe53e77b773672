"""Signup, login and account status endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from invoicely.api.v1._authz import identified_account
from invoicely.core.dependencies import Services, get_services
from invoicely.models import Account
from invoicely.schemas.auth import AccountStatusResponse, LoginRequest, LoginResponse, SignupRequest
from invoicely.schemas.common import APIEnvelope

router = APIRouter(tags=["auth"])


@router.post("/auth/signup", response_model=APIEnvelope, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupRequest, services: Services = Depends(get_services)) -> APIEnvelope:
    services.accounts.signup(email=payload.email, password=payload.password, mobile=payload.mobile)
    return APIEnvelope(message="User registered successfully.")


@router.post("/auth/login", response_model=LoginResponse)
def login(payload: LoginRequest, services: Services = Depends(get_services)) -> LoginResponse:
    result = services.accounts.login(email=payload.email, password=payload.password)
    return LoginResponse(
        token=result.token,
        user=AccountStatusResponse.model_validate(result.status),
    )


@router.get("/account", response_model=AccountStatusResponse)
def account_status(
    account: Account = Depends(identified_account),
    services: Services = Depends(get_services),
) -> AccountStatusResponse:
    return AccountStatusResponse.model_validate(services.accounts.status(account))
