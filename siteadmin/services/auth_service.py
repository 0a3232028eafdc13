"""Auth service: admin login and login log recording."""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List

from sqlalchemy.orm import Session

from siteadmin.models.user import AdminUser
from siteadmin.models.login_log import AdminLoginLog
from siteadmin.models.site import AdminSite
from siteadmin.core.security import hash_password, verify_password, create_access_token
from siteadmin.core.exceptions import (
    AuthenticationError, AuthorizationError, ValidationError,
)

logger = logging.getLogger("siteadmin.auth")

INVALID_CREDENTIALS = "Invalid username or password"
ACCOUNT_DISABLED = "Account is disabled"
LOGIN_SUCCESS = "Login successful"


class AuthService:
    """Authenticates admin users and records every attempt as a login log."""

    @staticmethod
    def record_login(
        db: Session,
        username: str,
        status: int,
        message: str,
        site_id: Optional[int] = None,
        user_id: Optional[int] = None,
        ip: Optional[str] = None,
        ip_list: Optional[List[str]] = None,
        user_agent: Optional[str] = None,
        admin_entry_path: Optional[str] = None,
    ) -> AdminLoginLog:
        """Write a single login log row.

        A site id of 0 means the request was not bound to a site and is
        stored as NULL. Commits immediately so failed attempts are kept even
        when the caller raises afterwards.
        """
        entry = AdminLoginLog(
            site_id=site_id or None,
            user_id=user_id,
            username=username[:64],
            ip=ip,
            ip_list=ip_list or None,
            admin_entry_path=admin_entry_path,
            user_agent=(user_agent or "")[:255] or None,
            status=status,
            message=message,
        )
        db.add(entry)
        db.commit()
        return entry

    @staticmethod
    def authenticate(
        db: Session,
        username: str,
        password: str,
        site_id: int = 0,
        ip: Optional[str] = None,
        ip_list: Optional[List[str]] = None,
        user_agent: Optional[str] = None,
        admin_entry_path: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Authenticate an admin user and return an access token.

        Raises:
            AuthenticationError: Unknown user or wrong password.
            AuthorizationError: The account is disabled.
        """
        if admin_entry_path is None and site_id:
            site = db.get(AdminSite, site_id)
            admin_entry_path = site.admin_entry_path if site else None

        context = {
            "site_id": site_id,
            "ip": ip,
            "ip_list": ip_list,
            "user_agent": user_agent,
            "admin_entry_path": admin_entry_path,
        }
        user = db.query(AdminUser).filter(AdminUser.username == username).first()

        if not user:
            AuthService.record_login(
                db, username, AdminLoginLog.STATUS_FAILED, INVALID_CREDENTIALS, **context
            )
            logger.warning("Failed login for unknown user %r from %s", username, ip)
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not user.is_active:
            AuthService.record_login(
                db, username, AdminLoginLog.STATUS_FAILED, ACCOUNT_DISABLED,
                user_id=user.id, **context,
            )
            logger.warning("Login refused for disabled user %r from %s", username, ip)
            raise AuthorizationError(ACCOUNT_DISABLED)

        if not verify_password(password, user.hashed_password):
            AuthService.record_login(
                db, username, AdminLoginLog.STATUS_FAILED, INVALID_CREDENTIALS,
                user_id=user.id, **context,
            )
            logger.warning("Wrong password for user %r from %s", username, ip)
            raise AuthenticationError(INVALID_CREDENTIALS)

        user.last_login_ip = ip
        user.last_login_at = datetime.now(timezone.utc).replace(tzinfo=None)
        AuthService.record_login(
            db, username, AdminLoginLog.STATUS_SUCCESS, LOGIN_SUCCESS,
            user_id=user.id, **context,
        )

        principal_site_id = user.site_id or site_id or 0
        token_data = {
            "sub": str(user.id),
            "username": user.username,
            "site_id": principal_site_id,
            "super_admin": user.is_super_admin,
        }
        return {
            "access_token": create_access_token(token_data),
            "token_type": "bearer",
            "user": {
                "id": user.id,
                "username": user.username,
                "real_name": user.real_name,
                "site_id": principal_site_id,
                "is_super_admin": user.is_super_admin,
            },
        }

    @staticmethod
    def create_user(
        db: Session,
        username: str,
        password: str,
        site_id: Optional[int] = None,
        real_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> AdminUser:
        """Create a new admin user."""
        existing = db.query(AdminUser).filter(AdminUser.username == username).first()
        if existing:
            raise ValidationError(f"User '{username}' already exists")

        user = AdminUser(
            username=username,
            hashed_password=hash_password(password),
            site_id=site_id,
            real_name=real_name,
            email=email,
            status=AdminUser.STATUS_ACTIVE,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user


auth_service = AuthService()
