#!/usr/bin/env python3
"""Design document CLI - generate a Digital Employee design document for a design week.

Usage:
    # Generate with the configured LLM provider
    python main.py --design-week dw-example

    # Dutch narrative via OpenAI
    python main.py --design-week dw-example --language nl --provider openai

    # No LLM call: synthesize narrative from the design-week data only
    python main.py --design-week dw-example --offline
"""

import sys
import json
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.panel import Panel
    from rich.progress import Progress, SpinnerColumn, TextColumn
except ImportError:
    print("Missing dependencies. Run: pip install click rich")
    sys.exit(1)

from contracts import DocumentLanguage, DocumentType
from orchestrator import DesignWeekNotFound, NoApprovedItems, generate_document, load_document
from providers import list_providers as get_available_providers
from store import JsonFileStore
from config import settings


console = Console()


def write_outputs(result, output_dir: Path) -> Path:
    """Write the stored record as JSON and the document as markdown.

    Returns:
        Directory the files were written to
    """
    record = result.document
    target = output_dir / record.design_week_id
    target.mkdir(parents=True, exist_ok=True)

    stem = f"{record.type.value.lower()}_v{record.version}"
    (target / f"{stem}.json").write_text(
        json.dumps(record.model_dump(mode="json"), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    (target / f"{stem}.md").write_text(load_document(record).to_markdown(), encoding="utf-8")
    return target


@click.command()
@click.option(
    "--design-week", "-d", "design_week_id",
    required=False,
    help="Id of the design week to document"
)
@click.option(
    "--data-dir",
    default=None,
    help=f"Data directory of the JSON store (default: {settings.data_dir})"
)
@click.option(
    "--type", "-t", "document_type",
    type=click.Choice([t.value for t in DocumentType]),
    default=DocumentType.DE_DESIGN.value,
    help="Document type (default: DE_DESIGN)"
)
@click.option(
    "--language", "-l",
    type=click.Choice([lang.value for lang in DocumentLanguage]),
    default=settings.default_language,
    help="Narrative language (default: en)"
)
@click.option(
    "--provider", "-p",
    type=click.Choice(["anthropic", "openai", "litellm"]),
    default=None,
    help=f"LLM provider (default: {settings.provider})"
)
@click.option(
    "--model",
    default=None,
    help="Model name (e.g., claude-sonnet, gpt-4o, anthropic/claude-sonnet-4-20250514)"
)
@click.option(
    "--offline",
    is_flag=True,
    help="Skip the LLM and synthesize the narrative from design-week data"
)
@click.option(
    "--output", "-o", "output_dir",
    default=None,
    help=f"Output directory (default: {settings.output_dir})"
)
@click.option(
    "--list-providers",
    is_flag=True,
    help="List available providers and exit"
)
def main(
    design_week_id: Optional[str],
    data_dir: Optional[str],
    document_type: str,
    language: str,
    provider: Optional[str],
    model: Optional[str],
    offline: bool,
    output_dir: Optional[str],
    list_providers: bool,
):
    """Generate a Digital Employee design document.

    Reads the design week from the JSON store, writes a new document version
    back to it and exports the document as JSON and markdown.
    """
    # Handle --list-providers
    if list_providers:
        console.print("[bold]Available LLM Providers:[/bold]\n")
        providers_status = get_available_providers()
        for name, available in providers_status.items():
            status = "[green]✓ Ready[/green]" if available else "[red]✗ No API key[/red]"
            console.print(f"  {name:12} {status}")
        console.print("\n[dim]Set API keys via environment variables:[/dim]")
        console.print("  ANTHROPIC_API_KEY, OPENAI_API_KEY (or DE_DOCGEN_ANTHROPIC_API_KEY, DE_DOCGEN_OPENAI_API_KEY)")
        return

    store = JsonFileStore(data_dir)

    if not design_week_id:
        console.print("[red]Error: --design-week is required[/red]")
        known = store.list_design_weeks()
        if known:
            console.print(f"[dim]Known design weeks:[/dim] {', '.join(known)}")
        sys.exit(1)

    console.print(Panel.fit(
        "[bold blue]Design Document Generator[/bold blue]\n"
        "[dim]Digital Employee design documents from design-week data[/dim]",
        border_style="blue"
    ))

    console.print(f"\n[dim]Design week:[/dim] {design_week_id}")
    console.print(f"[dim]Type:[/dim] {document_type}  [dim]Language:[/dim] {language}")
    if offline:
        console.print("[dim]Mode:[/dim] offline (no LLM call)")
    elif provider or model:
        console.print(f"[dim]Provider:[/dim] {provider or settings.provider}")
        if model:
            console.print(f"[dim]Model:[/dim] {model}")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Generating...", total=None)
        try:
            result = generate_document(
                store,
                design_week_id,
                document_type=document_type,
                language=language,
                provider=provider,
                model=model,
                offline=offline,
            )
        except (DesignWeekNotFound, NoApprovedItems) as e:
            progress.stop()
            console.print(f"[red]Error:[/red] {e}")
            sys.exit(1)
        progress.update(task, completed=True)

    record = result.document
    generated = record.content.get("generated") or {}
    is_fallback = (generated.get("generation_metadata") or {}).get("is_fallback", False)

    console.print("\n" + "=" * 60)
    console.print(f"[green]Document:[/green] {record.type.value} v{record.version} ({record.status})")
    console.print(f"[green]Id:[/green] {record.id}")
    if is_fallback:
        console.print("[yellow]Narrative synthesized without the LLM (fallback)[/yellow]")

    console.print("\n[bold]Usage:[/bold]")
    console.print(f"  Input tokens:  {result.usage.input_tokens:,}")
    console.print(f"  Output tokens: {result.usage.output_tokens:,}")
    console.print(f"  Latency:       {result.usage.latency_ms:,} ms")
    cost = settings.calculate_cost(result.usage.input_tokens, result.usage.output_tokens)
    console.print(f"  Est. cost:     ${cost:.4f}")

    if result.missing_fields:
        console.print(f"\n[yellow]Missing fields ({len(result.missing_fields)}):[/yellow]")
        for field in result.missing_fields:
            console.print(f"  - {field}")

    if result.warnings:
        console.print(f"\n[yellow]Warnings ({len(result.warnings)}):[/yellow]")
        for warning in result.warnings:
            console.print(f"  - {warning}")

    target = write_outputs(result, Path(output_dir) if output_dir else settings.get_output_path())
    console.print(f"\n[bold]Output saved to:[/bold] {target}")
    console.print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
