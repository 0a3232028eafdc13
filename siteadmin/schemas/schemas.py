"""Pydantic schemas for API request/response serialization."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Any, Union
from datetime import date, datetime


# Largest value a signed 64-bit INTEGER column or OFFSET accepts
MAX_DB_INT = 2 ** 63 - 1


def in_db_range(value: int) -> bool:
    return -MAX_DB_INT - 1 <= value <= MAX_DB_INT


def coerce_int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    """Loose integer parsing for query-string input.

    Absent, empty and malformed values fall back to ``default`` instead of
    failing, so a bad filter never turns into a validation error. So do
    non-finite numbers and integers the database cannot hold.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if in_db_range(value) else default
    text = str(value).strip()
    if not text:
        return default
    try:
        result = int(text)
    except ValueError:
        try:
            result = int(float(text))
        except (ValueError, OverflowError):
            return default
    return result if in_db_range(result) else default


def coerce_date(value: Any) -> Optional[date]:
    """Parse the calendar day of ``YYYY-MM-DD`` (time part ignored); None if unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


# ---- Principal ----
class Principal(BaseModel):
    """Authorization context of the caller, passed explicitly to every operation."""
    model_config = ConfigDict(frozen=True)

    user_id: int = 0
    username: str = ""
    site_id: int = 0
    is_super_admin: bool = False

    @field_validator("site_id", mode="before")
    @classmethod
    def _site_id(cls, v: Any) -> int:
        return max(coerce_int(v, 0), 0)


# ---- Auth ----
class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Optional[Dict[str, Any]] = None


# ---- Login log ----
class LoginLogFilters(BaseModel):
    """Optional filters for the login log list. Every field may be absent."""
    site_id: int = 0
    username: Optional[str] = None
    status: Optional[int] = None
    ip: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    page: int = 1
    page_size: Optional[int] = None

    @field_validator("site_id", mode="before")
    @classmethod
    def _site_id(cls, v: Any) -> int:
        return coerce_int(v, 0)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> Optional[int]:
        return coerce_int(v, None)

    @field_validator("page", mode="before")
    @classmethod
    def _page(cls, v: Any) -> int:
        return max(coerce_int(v, 1), 1)

    @field_validator("page_size", mode="before")
    @classmethod
    def _page_size(cls, v: Any) -> Optional[int]:
        return coerce_int(v, None)

    @field_validator("username", "ip", mode="before")
    @classmethod
    def _trimmed(cls, v: Any) -> Optional[str]:
        return strip_or_none(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _dates(cls, v: Any) -> Optional[date]:
        return coerce_date(v)


class UserSummary(BaseModel):
    id: int
    username: str
    real_name: Optional[str] = None

    class Config:
        from_attributes = True

class SiteSummary(BaseModel):
    id: int
    name: str
    domain: str

    class Config:
        from_attributes = True

class LoginLogOut(BaseModel):
    id: int
    site_id: Optional[int] = None
    user_id: Optional[int] = None
    username: str
    ip: Optional[str] = None
    ip_list: Optional[List[str]] = None
    admin_entry_path: Optional[str] = None
    user_agent: Optional[str] = None
    status: int
    message: Optional[str] = None
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    site: Optional[SiteSummary] = None

    class Config:
        from_attributes = True

class LoginLogListResponse(BaseModel):
    data: List[LoginLogOut]
    total: int
    page: int
    page_size: int
    last_page: int

class SiteOption(BaseModel):
    value: Union[int, str]
    label: str

class BatchDeleteRequest(BaseModel):
    ids: List[int] = []

    @field_validator("ids")
    @classmethod
    def _ids_in_range(cls, v: List[int]) -> List[int]:
        # an id the database cannot store can never match a row
        return [i for i in v if in_db_range(i)]

class BatchDeleteResponse(BaseModel):
    message: str
    count: int


# ---- Generic ----
class MessageResponse(BaseModel):
    message: str
    detail: Optional[Any] = None
