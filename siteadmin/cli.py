"""Site Admin CLI tool (siteadmin)."""

from typing import List, Optional

import typer

app = typer.Typer(name="siteadmin", help="Site Admin CLI")
db_app = typer.Typer(help="Database management commands")
logs_app = typer.Typer(help="Login log commands (run with super-admin scope)")
app.add_typer(db_app, name="db")
app.add_typer(logs_app, name="logs")


@db_app.command("init")
def db_init():
    """Create all tables that don't exist yet."""
    from siteadmin.db.session import init_db

    init_db()
    typer.echo("✅ Tables created")


@db_app.command("seed")
def db_seed():
    """Seed the default site and the super-admin."""
    from siteadmin.db.session import SessionLocal
    from siteadmin.db.seeds.seed_sites import seed_sites
    from siteadmin.db.seeds.seed_super_admin import seed_super_admin

    db = SessionLocal()
    try:
        seed_sites(db)
        seed_super_admin(db)
    finally:
        db.close()
    typer.echo("✅ All seeds applied")


@db_app.command("reset")
def db_reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Drop and recreate all tables (DANGER)."""
    if not yes and not typer.confirm("⚠️  This will DROP every table. Continue?"):
        raise typer.Abort()
    from siteadmin.db.session import drop_db, init_db

    drop_db()
    init_db()
    typer.echo("✅ Database reset")


@logs_app.command("list")
def logs_list(
    site_id: int = typer.Option(0, help="Only this site (0 = all sites)"),
    username: Optional[str] = typer.Option(None, help="Username substring"),
    status: Optional[int] = typer.Option(None, help="1 = success, 0 = failure"),
    ip: Optional[str] = typer.Option(None, help="IP substring"),
    start_date: Optional[str] = typer.Option(None, help="YYYY-MM-DD"),
    end_date: Optional[str] = typer.Option(None, help="YYYY-MM-DD, inclusive"),
    page: int = typer.Option(1, help="Page number"),
    page_size: int = typer.Option(15, help="Rows per page"),
):
    """List login logs across sites."""
    from siteadmin.db.session import SessionLocal
    from siteadmin.schemas.schemas import LoginLogFilters, Principal
    from siteadmin.services.login_log_service import login_log_service

    filters = LoginLogFilters(
        site_id=site_id, username=username, status=status, ip=ip,
        start_date=start_date, end_date=end_date, page=page, page_size=page_size,
    )
    db = SessionLocal()
    try:
        result = login_log_service.list_logs(db, filters, Principal(is_super_admin=True))
        for log in result["logs"]:
            outcome = "ok  " if log.is_success else "fail"
            typer.echo(
                f"  [{log.id}] {log.created_at:%Y-%m-%d %H:%M:%S} {outcome} "
                f"site={log.site_id or '-'} {log.username} {log.ip or '-'}"
            )
        typer.echo(f"{result['total']} total, page {result['page']} ({result['page_size']} per page)")
    finally:
        db.close()


@logs_app.command("delete")
def logs_delete(
    ids: List[int] = typer.Argument(..., help="Login log ids to delete"),
):
    """Delete login logs by id."""
    from siteadmin.db.session import SessionLocal
    from siteadmin.schemas.schemas import Principal
    from siteadmin.services.login_log_service import login_log_service

    db = SessionLocal()
    try:
        count = login_log_service.batch_delete(db, ids, Principal(is_super_admin=True))
    finally:
        db.close()
    typer.echo(f"✅ Deleted {count} of {len(ids)} login logs")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Host"),
    port: int = typer.Option(8000, help="Port"),
    reload: bool = typer.Option(False, help="Auto-reload"),
):
    """Start the FastAPI server."""
    import uvicorn
    uvicorn.run("siteadmin.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
