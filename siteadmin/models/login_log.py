"""Login log model: one row per admin login attempt."""

from sqlalchemy import Column, Integer, SmallInteger, String, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from siteadmin.db.base import Base


class AdminLoginLog(Base):
    """Record of a single login attempt against the admin backend.

    Rows are written by the login flow and never updated afterwards; the
    only mutation the admin panel performs on them is deletion.
    """
    __tablename__ = "admin_login_logs"

    STATUS_FAILED = 0
    STATUS_SUCCESS = 1

    id = Column(Integer, primary_key=True, autoincrement=True)
    site_id = Column(Integer, ForeignKey("admin_sites.id", ondelete="SET NULL"), nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True, index=True)
    username = Column(String(64), nullable=False, index=True)
    ip = Column(String(45), nullable=True)
    ip_list = Column(JSON, nullable=True)  # every candidate client IP, first one is `ip`
    admin_entry_path = Column(String(100), nullable=True)
    user_agent = Column(String(255), nullable=True)
    status = Column(SmallInteger, nullable=False, default=STATUS_FAILED, index=True)
    message = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    user = relationship("AdminUser", lazy="select")
    site = relationship("AdminSite", lazy="select")

    @property
    def is_success(self) -> bool:
        return self.status == self.STATUS_SUCCESS
