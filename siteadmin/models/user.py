"""Admin user model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from siteadmin.db.base import Base
from siteadmin.core.config import settings


class AdminUser(Base):
    """Back-office user, optionally bound to a single site."""
    __tablename__ = "admin_users"

    STATUS_DISABLED = 0
    STATUS_ACTIVE = 1

    id = Column(Integer, primary_key=True, autoincrement=True)
    site_id = Column(Integer, ForeignKey("admin_sites.id"), nullable=True, index=True)
    username = Column(String(64), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    real_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    status = Column(Integer, default=STATUS_ACTIVE, nullable=False)
    last_login_ip = Column(String(45), nullable=True)
    last_login_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    site = relationship("AdminSite", lazy="joined")

    @property
    def is_active(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    @property
    def is_super_admin(self) -> bool:
        return self.id == settings.SUPER_ADMIN_USER_ID
