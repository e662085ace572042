"""Click CLI entry point for operating the blog backend."""

from __future__ import annotations

import sys

import click

from lingvoblog.config import LANGUAGES, Settings
from lingvoblog.db import Database
from lingvoblog.logging import configure_logging


def _get_db(settings: Settings) -> Database:
    if not settings.database_url:
        settings.ensure_data_dir()
    db = Database(settings.db_url)
    db.init_schema()
    return db


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """lingvoblog: operate the multilingual blog backend."""
    ctx.ensure_object(dict)
    settings = ctx.obj.get("settings") or Settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, log_format=settings.log_format)
    ctx.obj["settings"] = settings


@cli.command("init-db")
@click.pass_context
def init_db(ctx: click.Context) -> None:
    """Create the database tables."""
    db = _get_db(ctx.obj["settings"])
    db.close()
    click.echo("Database schema ready.")


@cli.command()
@click.argument("urls", nargs=-1, required=True)
@click.pass_context
def ping(ctx: click.Context, urls: tuple[str, ...]) -> None:
    """Notify search engines that URLS changed."""
    from lingvoblog.clients.search_engines import SearchEngineNotifier

    settings = ctx.obj["settings"]
    results = SearchEngineNotifier(settings.site_url, settings.indexnow_key).notify(list(urls))
    for result in results:
        mark = "ok " if result.ok else "ERR"
        click.echo(f"  [{mark}] {result.engine}: {result.message or ''}")
    succeeded = sum(r.ok for r in results)
    click.echo(f"{succeeded}/{len(results)} search engines notified")


@cli.command("llms-txt")
@click.pass_context
def llms_txt(ctx: click.Context) -> None:
    """Print the llms.txt digest."""
    from lingvoblog.digest import build_llms_txt

    settings = ctx.obj["settings"]
    db = _get_db(settings)
    try:
        text, _complete = build_llms_txt(db, settings)
        click.echo(text, nl=False)
    finally:
        db.close()


@cli.command()
@click.pass_context
def sitemap(ctx: click.Context) -> None:
    """Print the XML sitemap."""
    from lingvoblog.sitemap import render_sitemap

    settings = ctx.obj["settings"]
    db = _get_db(settings)
    try:
        click.echo(
            render_sitemap(db.list_published_posts(), db.list_categories(), settings.site_url)
        )
    finally:
        db.close()


def _set_published(settings: Settings, slug: str, published: bool) -> None:
    db = _get_db(settings)
    try:
        post = db.set_post_published(slug, published)
        if post is None:
            click.echo(f"Post '{slug}' not found.", err=True)
            sys.exit(1)
        state = f"published at {post.published_at:%Y-%m-%d %H:%M}" if post.published else "draft"
        click.echo(f"{post.slug}: {state}")
    finally:
        db.close()


@cli.command()
@click.argument("slug")
@click.pass_context
def publish(ctx: click.Context, slug: str) -> None:
    """Publish a post."""
    _set_published(ctx.obj["settings"], slug, True)


@cli.command()
@click.argument("slug")
@click.pass_context
def unpublish(ctx: click.Context, slug: str) -> None:
    """Return a post to draft."""
    _set_published(ctx.obj["settings"], slug, False)


@cli.command("set-setting")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_setting(ctx: click.Context, key: str, value: str) -> None:
    """Set a site setting (social links, analytics IDs)."""
    db = _get_db(ctx.obj["settings"])
    try:
        db.set_site_setting(key, value)
        click.echo(f"{key} = {value}")
    finally:
        db.close()


@cli.command("add-keyword")
@click.argument("keyword")
@click.option("--language", type=click.Choice(LANGUAGES), default="uz", show_default=True)
@click.option("--priority", type=int, default=0, show_default=True)
@click.pass_context
def add_keyword(ctx: click.Context, keyword: str, language: str, priority: int) -> None:
    """Add a site-wide SEO keyword."""
    db = _get_db(ctx.obj["settings"])
    try:
        db.add_seo_keyword(keyword, language, priority)
        click.echo(f"Added keyword '{keyword}' ({language}, priority {priority})")
    finally:
        db.close()


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Run the API server."""
    import uvicorn

    settings = ctx.obj["settings"]
    uvicorn.run(
        "lingvoblog.api.app:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )
