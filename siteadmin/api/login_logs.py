"""Admin login log API router."""

import json
import math
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from siteadmin.db.session import get_db
from siteadmin.core.exceptions import ValidationError
from siteadmin.core.security import get_current_principal
from siteadmin.schemas.schemas import (
    BatchDeleteRequest, BatchDeleteResponse, LoginLogFilters, LoginLogListResponse,
    LoginLogOut, MessageResponse, Principal, SiteOption,
)
from siteadmin.services.login_log_service import login_log_service

router = APIRouter(prefix="/admin/system/login-logs", tags=["admin-login-logs"])


def decode_filters(raw: Optional[str]) -> Dict[str, Any]:
    """Decode the JSON ``filters`` object the admin search form sends.

    Anything that is not a JSON object decodes to nothing, and keys starting
    with ``_`` are reserved and dropped.
    """
    if not raw:
        return {}
    try:
        decoded = json.loads(raw)
    except ValueError:
        return {}
    if not isinstance(decoded, dict):
        return {}
    return {key: value for key, value in decoded.items() if not key.startswith("_")}


@router.get("", response_model=LoginLogListResponse)
def list_login_logs(
    site_id: Optional[str] = Query(None),
    username: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    ip: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None),
    filters: Optional[str] = Query(None, description="JSON object merged over the other params"),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """List login logs visible to the caller.

    Query parameters arrive as plain strings; malformed numbers and dates are
    treated as absent instead of rejected. Keys of the ``filters`` JSON
    object override the matching plain parameters.
    """
    params: Dict[str, Any] = {
        "site_id": site_id,
        "username": username,
        "status": status,
        "ip": ip,
        "start_date": start_date,
        "end_date": end_date,
        "page": page,
        "page_size": page_size,
    }
    params.update(decode_filters(filters))
    criteria = LoginLogFilters(**params)
    result = login_log_service.list_logs(db, criteria, principal)
    page_size_value = result["page_size"]
    return {
        "data": [LoginLogOut.model_validate(log) for log in result["logs"]],
        "total": result["total"],
        "page": result["page"],
        "page_size": page_size_value,
        "last_page": max(math.ceil(result["total"] / page_size_value), 1),
    }


@router.get("/site-options", response_model=List[SiteOption])
def site_filter_options(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Site dropdown for the list filter (empty unless super admin)."""
    return login_log_service.get_site_filter_options(db, principal)


@router.get("/{log_id}", response_model=LoginLogOut)
def show_login_log(
    log_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Get one login log."""
    return LoginLogOut.model_validate(login_log_service.get_by_id(db, log_id, principal))


@router.delete("/{log_id}", response_model=MessageResponse)
def delete_login_log(
    log_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Delete one login log."""
    deleted = login_log_service.delete(db, log_id, principal)
    return MessageResponse(message="Deleted" if deleted else "Nothing deleted")


@router.post("/batch-delete", response_model=BatchDeleteResponse)
def batch_delete_login_logs(
    body: BatchDeleteRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    """Delete several login logs; ids out of the caller's scope are skipped."""
    if not body.ids:
        raise ValidationError("Select the records to delete")
    count = login_log_service.batch_delete(db, body.ids, principal)
    return BatchDeleteResponse(message=f"Deleted {count} records", count=count)
