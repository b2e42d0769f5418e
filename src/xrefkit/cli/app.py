from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from xrefkit.core.config import XrefkitConfig
from xrefkit.core.exceptions import (
    AmbiguousXrefError,
    ManifestError,
    XrefLinkNotFoundError,
    XrefNotFoundError,
)
from xrefkit.core.logging import DEFAULT_LOG_FILE, setup_logging
from xrefkit.core.types import get_children, get_link, get_xref
from xrefkit.engine.resolver import XrefResolver, iter_documents_with_depth
from xrefkit.infra.manifest import load_manifest

app = typer.Typer(name="xrefkit", help="Resolve cross-references between produced documents.")

console = Console()
err_console = Console(stderr=True)

MANIFEST_OPTION = typer.Option(..., "--manifest", "-m", help="YAML manifest of pipeline outputs.")
PIPELINE_OPTION = typer.Option(
    None, "--pipeline", "-p", help="Pipeline to search (defaults to the configured content pipeline)."
)


def _build_resolver(manifest: Path, pipeline: str | None) -> XrefResolver:
    config = XrefkitConfig.load()
    log_file = config.logging.log_file
    if log_file is None and config.logging.log_to_file:
        log_file = DEFAULT_LOG_FILE
    setup_logging(config.logging.level, log_file)

    try:
        outputs = load_manifest(manifest)
    except ManifestError as exc:
        err_console.print(f"[bold red]Invalid manifest:[/] {exc}")
        raise typer.Exit(code=2) from exc

    return XrefResolver(outputs, pipeline or config.resolver.content_pipeline)


def _ambiguous(exc: AmbiguousXrefError) -> None:
    err_console.print(f"[bold red]Ambiguous xref:[/] {exc}")
    for doc in exc.matches:
        err_console.print(f"  - {doc.id} ({get_link(doc) or 'no link'})")


@app.command()
def find(
    key: str = typer.Argument(..., help="The xref to look up."),
    manifest: Path = MANIFEST_OPTION,
    pipeline: str | None = PIPELINE_OPTION,
):
    """
    Find the document carrying an xref.
    """
    resolver = _build_resolver(manifest, pipeline)
    try:
        doc = resolver.find_document(key)
    except XrefNotFoundError as exc:
        err_console.print(f"[bold red]Not found:[/] {exc}")
        raise typer.Exit(code=1) from exc
    except AmbiguousXrefError as exc:
        _ambiguous(exc)
        raise typer.Exit(code=1) from exc

    console.print(f"[bold cyan]ID:[/] {doc.id}")
    console.print(f"[bold cyan]Xref:[/] {get_xref(doc)}")
    console.print(f"[bold cyan]Link:[/] {get_link(doc) or '-'}")
    console.print(f"[bold cyan]Children:[/] {len(get_children(doc))}")


@app.command()
def link(
    key: str = typer.Argument(..., help="The xref to resolve."),
    manifest: Path = MANIFEST_OPTION,
    pipeline: str | None = PIPELINE_OPTION,
):
    """
    Print the published link of the document carrying an xref.
    """
    resolver = _build_resolver(manifest, pipeline)
    try:
        resolved = resolver.resolve_link(key)
    except XrefNotFoundError as exc:
        err_console.print(f"[bold red]Not found:[/] {exc}")
        raise typer.Exit(code=1) from exc
    except XrefLinkNotFoundError as exc:
        err_console.print(f"[bold yellow]Unpublished:[/] {exc}")
        raise typer.Exit(code=1) from exc
    except AmbiguousXrefError as exc:
        _ambiguous(exc)
        raise typer.Exit(code=1) from exc

    console.print(resolved, markup=False, highlight=False)


@app.command("list")
def list_xrefs(
    manifest: Path = MANIFEST_OPTION,
    pipeline: str | None = PIPELINE_OPTION,
):
    """
    List every document carrying an xref, in traversal order.
    """
    resolver = _build_resolver(manifest, pipeline)

    table = Table(title=f"Xrefs in {resolver.content_pipeline}")
    table.add_column("Xref", style="bold cyan")
    table.add_column("Depth", justify="right")
    table.add_column("Link")

    for doc, depth in iter_documents_with_depth(resolver.documents):
        xref = get_xref(doc)
        if xref is not None:
            table.add_row(xref, str(depth), get_link(doc) or "-")

    console.print(table)


if __name__ == "__main__":
    app()
