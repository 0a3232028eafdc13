"""Pytest fixtures: in-memory SQLite, test client, sites, users and log factory."""
import os
from datetime import datetime

import pytest

# Must be set before anything from siteadmin is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("LOGIN_RATE_LIMIT", "1000/minute")

from fastapi.testclient import TestClient

from siteadmin.core.security import create_access_token, hash_password
from siteadmin.db.session import SessionLocal, drop_db, init_db
from siteadmin.main import app
from siteadmin.models import AdminLoginLog, AdminSite, AdminUser
from siteadmin.schemas.schemas import Principal
from siteadmin.services.auth_service import auth_service


@pytest.fixture(autouse=True)
def _fresh_tables():
    """Every test starts from empty tables."""
    drop_db()
    init_db()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sites(db):
    """Sites 5 and 6 enabled, 7 disabled."""
    rows = [
        AdminSite(id=5, name="Alpha", domain="alpha.test", admin_entry_path="/alpha-admin", status=1),
        AdminSite(id=6, name="Beta", domain="beta.test", admin_entry_path="/beta-admin", status=1),
        AdminSite(id=7, name="Gamma", domain="gamma.test", status=0),
    ]
    db.add_all(rows)
    db.commit()
    return {site.id: site for site in rows}


@pytest.fixture
def users(db, sites):
    """Super admin (id 1, no site), an Alpha admin and a Beta admin."""
    root = AdminUser(id=1, username="root", hashed_password=hash_password("root-pass"), status=1)
    db.add(root)
    db.commit()
    alpha = auth_service.create_user(db, "alice", "alice-pass", site_id=5, real_name="Alice")
    beta = auth_service.create_user(db, "bob", "bob-pass", site_id=6, real_name="Bob")
    return {"root": root, "alice": alpha, "bob": beta}


@pytest.fixture
def make_log(db):
    """Factory inserting one login log row."""

    def _make(
        site_id=5,
        username="admin",
        status=AdminLoginLog.STATUS_FAILED,
        ip="10.0.0.1",
        created_at=None,
        user_id=None,
    ):
        log = AdminLoginLog(
            site_id=site_id,
            user_id=user_id,
            username=username,
            ip=ip,
            status=status,
            message="test",
            created_at=created_at or datetime(2024, 1, 5, 12, 0, 0),
        )
        db.add(log)
        db.commit()
        db.refresh(log)
        return log

    return _make


@pytest.fixture
def super_admin():
    return Principal(user_id=1, username="root", site_id=0, is_super_admin=True)


@pytest.fixture
def site5_admin():
    return Principal(user_id=2, username="alice", site_id=5, is_super_admin=False)


@pytest.fixture
def headers_for():
    """Authorization header carrying a principal as token claims."""

    def _headers(principal: Principal) -> dict:
        token = create_access_token({
            "sub": str(principal.user_id),
            "username": principal.username,
            "site_id": principal.site_id,
            "super_admin": principal.is_super_admin,
        })
        return {"Authorization": f"Bearer {token}"}

    return _headers
