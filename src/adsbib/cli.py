"""CLI entry point for the ads tool."""

from __future__ import annotations

import logging
from typing import Optional

import click
from rich.console import Console

from adsbib.exceptions import AdsError

console = Console()

LOGIC_CHOICES = ["OR", "AND"]
TEXT_LOGIC_CHOICES = ["OR", "AND", "SIMPLE", "BOOL"]
KIND_CHOICES = ["journal", "article", "arxiv-preprint", "data-archive", "SIMBAD", "NED"]


def _fail(e: Exception):
    console.print(f"[red]Error: {e}[/red]")
    raise SystemExit(1)


@click.group()
@click.version_option(package_name="ads-bib-cli")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log HTTP requests and parsing details.")
def cli(verbose: bool):
    """ads - Search NASA ADS and fetch BibTeX for the results."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


# ---------------------------------------------------------------------------
# ads env
# ---------------------------------------------------------------------------


@cli.group(invoke_without_command=True)
@click.pass_context
def env(ctx):
    """Show or configure the API token and options.

    Run without arguments to see current status.
    Use `ads env set KEY value` to save a key to ~/.ads/.env.
    """
    if ctx.invoked_subcommand is not None:
        return

    from adsbib.config import PERSISTENT_ENV, check_env

    statuses = check_env()
    console.print("Configuration Status:")
    console.print()
    for var, is_set, info in statuses:
        status = "[green]set[/green]" if is_set else "[red]not set[/red]"
        console.print(f"  {var}: {status}")
        console.print(f"    {info['description']}")
        console.print(f"    Used by: {', '.join(info['required_by'])}", style="dim")
        console.print()

    console.print(f"Config file: {PERSISTENT_ENV}", style="dim")


@env.command("set")
@click.argument("key")
@click.argument("value")
def env_set(key: str, value: str):
    """Save a key to ~/.ads/.env.

    KEY: one of ADS_API_TOKEN, ADS_LABEL_POLICY, ADS_API_TIMEOUT
    VALUE: the value to store
    """
    from adsbib.config import VALID_KEYS, save_key

    key = key.upper()
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key: {key}[/red]")
        console.print(f"Valid keys: {', '.join(sorted(VALID_KEYS))}")
        raise SystemExit(1)

    path = save_key(key, value)
    console.print(f"Saved {key} to {path}")


# ---------------------------------------------------------------------------
# ads search / advanced / list
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("query")
def search(query: str):
    """Search ADS and show the numbered result list.

    QUERY: ADS query string (e.g., 'author:"Quataert, E." year:2008')
    """
    from adsbib.renderer import render_results
    from adsbib.session import Session

    try:
        results = Session(persist=True).search(query)
    except AdsError as e:
        _fail(e)
    render_results(results)


@cli.command()
@click.option("--astronomy/--no-astronomy", default=True, help="Search the astronomy database.")
@click.option("--physics/--no-physics", default=False, help="Search the physics database.")
@click.option("--preprints/--no-preprints", default=False, help="Search arXiv preprints.")
@click.option("--author", "-a", "authors", multiple=True, help="Author name, 'Last, F.' (repeatable).")
@click.option("--author-logic", type=click.Choice(LOGIC_CHOICES), default=None, help="Combine authors with OR/AND.")
@click.option("--start-month", type=click.IntRange(1, 12), default=None)
@click.option("--start-year", type=int, default=None)
@click.option("--end-month", type=click.IntRange(1, 12), default=None)
@click.option("--end-year", type=int, default=None)
@click.option("--simbad", is_flag=True, default=False, help="Resolve object names via SIMBAD.")
@click.option("--ned", is_flag=True, default=False, help="Resolve object names via NED.")
@click.option("--ads-objects", is_flag=True, default=False, help="Resolve object names via ADS objects.")
@click.option("--object", "objects", default="", help="Object names.")
@click.option("--object-logic", type=click.Choice(LOGIC_CHOICES), default=None)
@click.option("--title", default="", help="Title words.")
@click.option("--title-logic", type=click.Choice(TEXT_LOGIC_CHOICES), default=None)
@click.option("--abstract", default="", help="Abstract words.")
@click.option("--abstract-logic", type=click.Choice(TEXT_LOGIC_CHOICES), default=None)
def advanced(
    astronomy: bool,
    physics: bool,
    preprints: bool,
    authors: tuple[str, ...],
    author_logic: Optional[str],
    start_month: Optional[int],
    start_year: Optional[int],
    end_month: Optional[int],
    end_year: Optional[int],
    simbad: bool,
    ned: bool,
    ads_objects: bool,
    objects: str,
    object_logic: Optional[str],
    title: str,
    title_logic: Optional[str],
    abstract: str,
    abstract_logic: Optional[str],
):
    """Structured search through the classic abstract service."""
    from adsbib.query import AdvancedSearchCriteria
    from adsbib.renderer import render_results
    from adsbib.session import Session

    try:
        criteria = AdvancedSearchCriteria(
            astronomy=astronomy, physics=physics, preprints=preprints,
            authors=list(authors), author_logic=author_logic,
            start_month=start_month, start_year=start_year,
            end_month=end_month, end_year=end_year,
            simbad=simbad, ned=ned, ads_objects=ads_objects,
            objects=objects, object_logic=object_logic,
            title=title, title_logic=title_logic,
            abstract=abstract, abstract_logic=abstract_logic,
        )
        results = Session(persist=True).search_advanced(criteria)
    except (AdsError, ValueError) as e:
        _fail(e)
    render_results(results)


@cli.command("list")
def list_results():
    """Show the current result list again."""
    from adsbib.renderer import render_results
    from adsbib.session import Session

    render_results(Session.restore().results)


# ---------------------------------------------------------------------------
# ads cite / link / details
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("ref")
@click.option(
    "--policy",
    type=click.Choice(["author-year", "verbatim"]),
    default=None,
    help="BibTeX key policy (default: ADS_LABEL_POLICY or author-year).",
)
def cite(ref: str, policy: Optional[str]):
    """Print the BibTeX record for an entry.

    REF: result number from the current list, or a bibcode
    """
    from adsbib.renderer import render_citation
    from adsbib.session import Session

    try:
        record = Session.restore().resolve_citation(ref, policy)
    except AdsError as e:
        _fail(e)
    render_citation(record)


@cli.command()
@click.argument("ref")
@click.argument("kind", type=click.Choice(KIND_CHOICES, case_sensitive=False))
@click.option("--open", "open_", is_flag=True, default=False, help="Open the URL in a browser.")
def link(ref: str, kind: str, open_: bool):
    """Print the URL of a follow-up resource.

    REF: result number from the current list, or a bibcode
    KIND: journal, article, arxiv-preprint, data-archive, SIMBAD or NED
    """
    from adsbib.renderer import render_url
    from adsbib.session import Session

    try:
        url = Session.restore().resource_url(ref, kind)
    except AdsError as e:
        _fail(e)
    render_url(url)
    if open_:
        click.launch(url)


@cli.command()
@click.argument("ref")
def details(ref: str):
    """Show abstract, journal and citation count for an entry.

    REF: result number from the current list, or a bibcode
    """
    from adsbib.renderer import render_details
    from adsbib.session import Session

    try:
        info = Session.restore().details(ref)
    except AdsError as e:
        _fail(e)
    render_details(info)
