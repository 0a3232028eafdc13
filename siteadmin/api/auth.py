"""Auth API router: login and current principal."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session

from siteadmin.db.session import get_db
from siteadmin.core.config import settings
from siteadmin.core.rate_limiter import collect_client_ips, limiter
from siteadmin.core.security import get_current_principal
from siteadmin.schemas.schemas import LoginRequest, TokenResponse, Principal, coerce_int
from siteadmin.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(
    request: Request,
    body: LoginRequest,
    db: Session = Depends(get_db),
    x_site_id: Optional[str] = Header(None, alias="X-Site-Id"),
):
    """Authenticate and return a JWT access token. Every attempt is logged."""
    ip_list = collect_client_ips(request)
    return auth_service.authenticate(
        db,
        body.username,
        body.password,
        site_id=max(coerce_int(x_site_id, 0), 0),
        ip=ip_list[0] if ip_list else "0.0.0.0",
        ip_list=ip_list,
        user_agent=request.headers.get("user-agent", ""),
    )


@router.get("/me", response_model=Principal)
def get_me(principal: Principal = Depends(get_current_principal)):
    """Return the principal resolved from the bearer token."""
    return principal
