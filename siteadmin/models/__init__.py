"""Models package: import all models so the metadata knows every table."""

from siteadmin.models.site import AdminSite
from siteadmin.models.user import AdminUser
from siteadmin.models.login_log import AdminLoginLog

__all__ = ["AdminSite", "AdminUser", "AdminLoginLog"]
