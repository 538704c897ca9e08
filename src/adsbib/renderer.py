"""Rich terminal renderer for listings, BibTeX records and record details."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from adsbib.formatter import render_listing
from adsbib.models import EntryDetails, ResultSet

console = Console()


def render_results(results: ResultSet) -> None:
    """Render the numbered listing with a short header."""
    if not len(results):
        console.print("[yellow]No results found.[/yellow]")
        return

    header = f"Found {len(results)} results"
    if results.query:
        header += f" for {results.query!r}"
    console.print(header, markup=False)
    console.print()

    listing = render_listing(results)
    starts = {listing.line_of(entry.index) for entry in results}
    for n, line in enumerate(listing.lines):
        if n in starts:
            console.print(Text(line, style="bold cyan"), soft_wrap=True)
        else:
            console.print(line, markup=False, highlight=False, soft_wrap=True)

    console.print()
    console.print("  > Use `ads cite <n>` for BibTeX, `ads link <n> <kind>` for resources", style="dim italic")


def render_citation(record: str) -> None:
    console.print(record.rstrip("\n"), markup=False, highlight=False, soft_wrap=True)


def render_url(url: str) -> None:
    console.print(url, markup=False, highlight=False, soft_wrap=True)


def render_details(details: EntryDetails) -> None:
    """Render extended metadata for a single record."""
    console.print(details.title or "(untitled)", style="bold", markup=False)
    console.print(details.identifier, style="dim", markup=False)

    meta_parts = []
    if details.authors:
        names = details.authors[:3]
        if len(details.authors) > 3:
            names = names + ["et al."]
        meta_parts.append("; ".join(names))
    if details.year:
        meta_parts.append(details.year)
    if details.journal:
        meta_parts.append(details.journal)
    if details.citation_count is not None:
        meta_parts.append(f"cited by {details.citation_count}")
    if meta_parts:
        console.print(" | ".join(meta_parts), style="dim", markup=False)

    if details.abstract:
        console.print()
        console.print(details.abstract, markup=False)
    console.print()
