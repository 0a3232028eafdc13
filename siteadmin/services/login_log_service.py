"""Login log service: tenant-scoped listing, lookup, and deletion."""

import logging
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.orm import Query, Session, joinedload

from siteadmin.core.config import settings
from siteadmin.core.exceptions import ErrorCode, ResourceNotFoundError
from siteadmin.models.login_log import AdminLoginLog
from siteadmin.models.site import AdminSite
from siteadmin.schemas.schemas import MAX_DB_INT, LoginLogFilters, Principal, in_db_range

logger = logging.getLogger("siteadmin.login_logs")

ALL_SITES_LABEL = "All sites"
NOT_FOUND_MESSAGE = "Login log not found"


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last second of ``day``; the end date filter is inclusive of the whole day."""
    return datetime.combine(day, time(23, 59, 59))


def scope_to_principal(query: Query, principal: Principal, requested_site_id: int = 0) -> Query:
    """Restrict ``query`` to the rows ``principal`` may see.

    Super admins see every site, narrowed to ``requested_site_id`` when it
    is positive. Anyone else bound to a site only ever sees that site, and
    whatever site they ask for is ignored.
    """
    if principal.is_super_admin:
        if requested_site_id > 0:
            query = query.filter(AdminLoginLog.site_id == requested_site_id)
    elif principal.site_id > 0:
        query = query.filter(AdminLoginLog.site_id == principal.site_id)
    return query


def effective_page_size(page_size: Optional[int]) -> int:
    if not page_size or page_size <= 0:
        return settings.LOGIN_LOG_PAGE_SIZE
    return min(page_size, settings.LOGIN_LOG_MAX_PAGE_SIZE)


class LoginLogService:
    """Reads and deletes login logs on behalf of an explicit Principal."""

    @staticmethod
    def build_query(db: Session, filters: LoginLogFilters, principal: Principal) -> Query:
        """Filtered, scoped and ordered query for the list view (not yet paginated)."""
        query = scope_to_principal(db.query(AdminLoginLog), principal, filters.site_id)

        if filters.username:
            query = query.filter(AdminLoginLog.username.ilike(f"%{filters.username}%"))
        if filters.status is not None:
            query = query.filter(AdminLoginLog.status == filters.status)
        if filters.ip:
            query = query.filter(AdminLoginLog.ip.ilike(f"%{filters.ip}%"))
        if filters.start_date:
            query = query.filter(AdminLoginLog.created_at >= start_of_day(filters.start_date))
        if filters.end_date:
            query = query.filter(AdminLoginLog.created_at <= end_of_day(filters.end_date))

        return query.order_by(AdminLoginLog.created_at.desc(), AdminLoginLog.id.desc())

    @staticmethod
    def list_logs(db: Session, filters: LoginLogFilters, principal: Principal) -> Dict[str, Any]:
        """Query login logs with filters and pagination."""
        query = LoginLogService.build_query(db, filters, principal)
        page_size = effective_page_size(filters.page_size)
        # keep the OFFSET representable
        page = min(filters.page, MAX_DB_INT // page_size)

        total = query.count()
        logs = (
            query.options(joinedload(AdminLoginLog.user), joinedload(AdminLoginLog.site))
            .offset((page - 1) * page_size)
            .limit(page_size)
            .all()
        )

        return {
            "logs": logs,
            "total": total,
            "page": page,
            "page_size": page_size,
        }

    @staticmethod
    def get_by_id(db: Session, log_id: int, principal: Principal) -> AdminLoginLog:
        """Fetch one login log visible to ``principal``.

        Raises:
            ResourceNotFoundError: If the row is missing or belongs to a
                site the principal cannot see; the two cases are not
                distinguishable. Ids outside the column range are
                reported the same way.
        """
        if not in_db_range(log_id):
            raise ResourceNotFoundError(NOT_FOUND_MESSAGE, ErrorCode.NOT_FOUND)
        query = scope_to_principal(
            db.query(AdminLoginLog).filter(AdminLoginLog.id == log_id), principal
        )
        log = query.options(
            joinedload(AdminLoginLog.user), joinedload(AdminLoginLog.site)
        ).first()
        if not log:
            raise ResourceNotFoundError(NOT_FOUND_MESSAGE, ErrorCode.NOT_FOUND)
        return log

    @staticmethod
    def delete(db: Session, log_id: int, principal: Principal) -> bool:
        """Delete one login log; True when exactly one row was removed."""
        log = LoginLogService.get_by_id(db, log_id, principal)
        deleted = (
            db.query(AdminLoginLog)
            .filter(AdminLoginLog.id == log.id)
            .delete(synchronize_session=False)
        )
        db.commit()
        logger.info("User %s deleted login log %s", principal.user_id, log_id)
        return deleted == 1

    @staticmethod
    def batch_delete(db: Session, ids: Sequence[int], principal: Principal) -> int:
        """Delete every listed login log the principal may see.

        Ids that are missing or out of scope are skipped, so the returned
        count can be lower than ``len(ids)``.
        """
        wanted = [i for i in ids if in_db_range(i)]
        if not wanted:
            return 0
        query = scope_to_principal(
            db.query(AdminLoginLog).filter(AdminLoginLog.id.in_(wanted)), principal
        )
        deleted = query.delete(synchronize_session=False)
        db.commit()
        logger.info(
            "User %s batch-deleted %d of %d login logs", principal.user_id, deleted, len(ids)
        )
        return deleted

    @staticmethod
    def get_site_filter_options(db: Session, principal: Principal) -> List[Dict[str, Any]]:
        """Site dropdown for the list filter; only super admins get one."""
        if not principal.is_super_admin:
            return []

        sites = (
            db.query(AdminSite)
            .filter(AdminSite.status == AdminSite.STATUS_ENABLED)
            .order_by(AdminSite.id.asc())
            .all()
        )
        options: List[Dict[str, Any]] = [{"value": "", "label": ALL_SITES_LABEL}]
        options.extend({"value": site.id, "label": site.name} for site in sites)
        return options


login_log_service = LoginLogService()
