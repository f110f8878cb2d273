"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables, panels, and formatted messages.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from digitflip.domain import GlyphRecord, Letter, SymbolSetInfo

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]DigitFlip[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_symbol_set(display_name: str, symbol_set_id: str, letter_count: int) -> None:
    """Print the active symbol set."""
    line = Text("  ")
    line.append(display_name, style="bold")
    line.append(f" ({symbol_set_id})")
    console.print(line)
    console.print(f"  {letter_count} letters mapped")


def print_digits(digits: str) -> None:
    """Print the "write these numbers" line.

    Args:
        digits: The digit line, spacing preserved
    """
    console.print("\n[bold]Write these numbers[/bold]")
    console.print(Text(f"  {digits}", style="bold cyan"))


def print_letters(rows: list[tuple[Letter, str | None]]) -> None:
    """Print the per-letter breakdown in display order.

    Args:
        rows: Letters with the tier their glyph came from
    """
    table = Table(box=None, padding=(0, 2), show_header=True, header_style="bold")
    table.add_column("letter")
    table.add_column("code")
    table.add_column("glyph")
    table.add_column("source")

    for letter, source in rows:
        style = "yellow" if source == "synthetic" else None
        table.add_row(letter.char, escape(letter.code.text), escape(letter.glyph_ref), source or "-", style=style)

    console.print(table)


def print_sets(infos: list[SymbolSetInfo], default_id: str) -> None:
    """Print discovered symbol sets.

    Args:
        infos: Sets in picker order
        default_id: Id of the set selected by default
    """
    if not infos:
        console.print("  No symbol sets found")
        return

    table = Table(box=None, padding=(0, 2), show_header=True, header_style="bold")
    table.add_column("id")
    table.add_column("name")
    table.add_column("status")

    for info in infos:
        marker = f" {SYM_OK}" if info.id == default_id else ""
        status_style = "green" if info.is_available else "dim"
        table.add_row(
            f"{escape(info.id)}{marker}",
            escape(info.display_name),
            Text(info.status.value.replace("_", " "), style=status_style),
        )

    console.print(table)


def print_glyph_summary(letter: Letter, record: GlyphRecord, source: str | None) -> None:
    """Print a summary of a resolved glyph record.

    Args:
        letter: The letter looked up
        record: Its parsed glyph
        source: Tier the glyph came from
    """
    vb = record.view_box
    console.print(
        f"\n[bold]{letter.char}[/bold] {SYM_DOT} code {escape(letter.code.text)} {SYM_DOT} {escape(letter.glyph_ref)}"
    )
    console.print(f"  source      {source or '-'}")
    console.print(f"  view box    {vb.x:g} {vb.y:g} {vb.width:g} {vb.height:g}")
    console.print(f"  shapes      {len(record.shapes)}")
    console.print(f"  labels      {len(record.labels)}")

    bounds = record.bounds()
    if bounds is not None:
        console.print("  bounds      " + " ".join(f"{v:.1f}" for v in bounds))

    for label in record.labels:
        console.print(f"  {SYM_DOT} text {escape(repr(label.content))} at {label.position.x:g},{label.position.y:g}")


def print_success(message: str, detail: str | None = None) -> None:
    """Print success message.

    Args:
        message: Main message
        detail: Optional path or extra information
    """
    console.print(f"\n[bold green]{SYM_OK}[/bold green] {escape(message)}")
    if detail:
        line = Text("  ")
        line.append(detail, style="bold")
        console.print(line)


def print_validation_error(message: str) -> None:
    """Print an input validation problem."""
    console.print(f"\n[bold red]{SYM_ERR}[/bold red] {escape(message)}")


def print_mapping_error(message: str) -> None:
    """Print a symbol set authoring problem found while encoding."""
    console.print(f"\n[bold yellow]{SYM_ERR} config:[/bold yellow] {escape(message)}")


def print_config_error(message: str, symbol_set_id: str) -> None:
    """Print the full configuration error notice.

    Args:
        message: Error message
        symbol_set_id: Set that failed to load
    """
    console.print(
        Panel(
            f"{escape(message)}\n\n[dim]Symbol set: {escape(symbol_set_id)}[/dim]",
            title="Configuration error",
            border_style="red",
            expand=False,
        )
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
