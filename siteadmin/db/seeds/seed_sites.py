"""Seed the default site."""

from sqlalchemy.orm import Session
from siteadmin.models.site import AdminSite
from siteadmin.core.config import settings


def seed_sites(db: Session) -> AdminSite:
    """Create the default site if no site uses its domain yet."""
    existing = db.query(AdminSite).filter(AdminSite.domain == settings.DEFAULT_SITE_DOMAIN).first()
    if existing:
        print(f"ℹ️  Site '{settings.DEFAULT_SITE_DOMAIN}' already exists, skipping.")
        return existing

    site = AdminSite(
        name=settings.DEFAULT_SITE_NAME,
        domain=settings.DEFAULT_SITE_DOMAIN,
        admin_entry_path="/admin",
        status=AdminSite.STATUS_ENABLED,
    )
    db.add(site)
    db.commit()
    db.refresh(site)
    print(f"✅ Created site: {site.name} ({site.domain})")
    return site
