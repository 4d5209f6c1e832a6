"""Command-line entry point."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import click

from .config import IndexOptions, SiteConfig, load_config
from .emitter import ContentIndexEmitter
from .errors import SiteIndexError
from .lib.log import configure_logging
from .sources import load_documents
from .version import SITEINDEX_VERSION


@dataclass
class AppEnv:
    verbose: bool = False
    json_logs: bool = False


def _apply_overrides(
    site: SiteConfig,
    options: IndexOptions,
    *,
    base_url: Optional[str],
    title: Optional[str],
    rss_limit: Optional[int],
    no_rss_limit: bool,
    full_html: Optional[bool],
    sitemap: Optional[bool],
    rss: Optional[bool],
    include_empty: Optional[bool],
) -> tuple[SiteConfig, IndexOptions]:
    if base_url is not None:
        site = replace(site, base_url=base_url.strip())
    if title is not None:
        site = replace(site, page_title=title)
    if no_rss_limit:
        options = replace(options, rss_limit=None)
    elif rss_limit is not None:
        options = replace(options, rss_limit=rss_limit)
    if full_html is not None:
        options = replace(options, rss_full_html=full_html)
    if sitemap is not None:
        options = replace(options, enable_sitemap=sitemap)
    if rss is not None:
        options = replace(options, enable_rss=rss)
    if include_empty is not None:
        options = replace(options, include_empty_files=include_empty)
    return site, options


@click.group()
@click.version_option(SITEINDEX_VERSION, prog_name="siteindex")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, json_logs: bool) -> None:
    """Build the sitemap, RSS feed and search index for a folder of notes."""
    configure_logging(verbose=verbose, json_logs=json_logs)
    ctx.obj = AppEnv(verbose=verbose, json_logs=json_logs)


@cli.command("build")
@click.argument(
    "content_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--output", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    required=True,
    help="Output directory for generated artifacts",
)
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON config file (default: $SITEINDEX_CONFIG)",
)
@click.option("--base-url", default=None, help="Site host and path, e.g. example.com/notes")
@click.option("--title", default=None, help="Site title")
@click.option("--rss-limit", type=int, default=None, help="Maximum feed items (default: 10)")
@click.option("--no-rss-limit", is_flag=True, help="Publish every note in the feed")
@click.option("--full-html/--no-full-html", default=None, help="Feed items carry rendered note bodies")
@click.option("--sitemap/--no-sitemap", default=None, help="Write sitemap.xml")
@click.option("--rss/--no-rss", default=None, help="Write the RSS feed")
@click.option("--include-empty/--skip-empty", default=None, help="Index notes without body text")
@click.pass_obj
def build_command(
    env: AppEnv,
    content_dir: Path,
    output: Path,
    config_path: Optional[Path],
    base_url: Optional[str],
    title: Optional[str],
    rss_limit: Optional[int],
    no_rss_limit: bool,
    full_html: Optional[bool],
    sitemap: Optional[bool],
    rss: Optional[bool],
    include_empty: Optional[bool],
) -> None:
    """Index CONTENT_DIR and write the artifacts to OUTPUT.

    \b
    Examples:
        siteindex build notes -o public --base-url example.com
        siteindex build notes -o public --no-rss-limit --full-html
    """
    try:
        site, options = load_config(config_path)
        site, options = _apply_overrides(
            site,
            options,
            base_url=base_url,
            title=title,
            rss_limit=rss_limit,
            no_rss_limit=no_rss_limit,
            full_html=full_html,
            sitemap=sitemap,
            rss=rss,
            include_empty=include_empty,
        )
        documents = load_documents(content_dir)
        written = ContentIndexEmitter(site, options).emit(documents, output)
    except (SiteIndexError, OSError) as exc:
        click.echo(f"Error building content index: {exc}", err=True)
        raise click.Abort() from exc

    for path in written:
        click.echo(str(path))


def main() -> None:
    cli()


__all__ = ["cli", "main"]
