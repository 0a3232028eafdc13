"""Site model: the tenant every admin user and login log belongs to."""

from sqlalchemy import Column, Integer, String, DateTime, func
from siteadmin.db.base import Base


class AdminSite(Base):
    """A tenant site served by the admin backend."""
    __tablename__ = "admin_sites"

    STATUS_DISABLED = 0
    STATUS_ENABLED = 1

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    domain = Column(String(255), unique=True, nullable=False, index=True)
    admin_entry_path = Column(String(100), nullable=True)
    status = Column(Integer, default=STATUS_ENABLED, nullable=False, index=True)
    sort = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def is_enabled(self) -> bool:
        return self.status == self.STATUS_ENABLED
