"""Seed the super-admin user from env vars."""

from sqlalchemy.orm import Session
from siteadmin.models.user import AdminUser
from siteadmin.core.security import hash_password
from siteadmin.core.config import settings


def seed_super_admin(db: Session) -> None:
    """Create the super-admin user if not already present.

    The super admin is recognised by id, so the row is inserted with
    ``SUPER_ADMIN_USER_ID`` explicitly and is not bound to any site.
    """
    existing = db.get(AdminUser, settings.SUPER_ADMIN_USER_ID)
    if existing:
        print(f"ℹ️  Super admin '{existing.username}' already exists, skipping.")
        return

    taken = db.query(AdminUser).filter(AdminUser.username == settings.SUPER_ADMIN_USERNAME).first()
    if taken:
        print(f"⚠️  Username '{settings.SUPER_ADMIN_USERNAME}' is taken by user {taken.id}, skipping.")
        return

    admin = AdminUser(
        id=settings.SUPER_ADMIN_USER_ID,
        username=settings.SUPER_ADMIN_USERNAME,
        hashed_password=hash_password(settings.SUPER_ADMIN_PASSWORD),
        real_name="Super Admin",
        site_id=None,
        status=AdminUser.STATUS_ACTIVE,
    )
    db.add(admin)
    db.commit()
    print(f"✅ Created super admin: {settings.SUPER_ADMIN_USERNAME}")
