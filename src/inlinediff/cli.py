from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from .config import Config
from .inline_diff import InlineDiff
from .models import OutputFormat
from .render import render_table, render_text
from .services.interfaces import ServiceError

console = Console()


def _read_text(path: str) -> str:
    """Read a file as UTF-8 text.

    Args:
        path: Path of the file to read

    Returns:
        File content
    """
    return Path(path).read_text(encoding="utf-8")


def _build_diff(old_file: str, new_file: str, context: int | None) -> InlineDiff:
    return InlineDiff(
        old_text=_read_text(old_file),
        new_text=_read_text(new_file),
        line_context_size=context,
        config=Config(),
    )


context_option = click.option(
    "--context",
    "-c",
    type=int,
    default=None,
    help="Unchanged lines to keep around each change (0 shows all)",
)


@click.group()
@click.version_option(package_name="inlinediff")
def main():
    """inlinediff - line-by-line diff viewer with context windowing."""
    pass


@main.command()
@click.argument("old_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("new_file", type=click.Path(exists=True, dir_okay=False))
@context_option
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([format_type.value for format_type in OutputFormat]),
    default=OutputFormat.TABLE.value,
    help="Output format (default: table)",
)
def show(old_file: str, new_file: str, context: int | None, output_format: str):
    """Show the inline diff between two files."""
    try:
        inline_diff = _build_diff(old_file, new_file, context)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Could not read input files: {escape(str(e))}[/red]")
        raise SystemExit(1) from e
    except ServiceError as e:
        console.print(f"[red]Diff failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from e

    result = inline_diff.result

    if OutputFormat(output_format) == OutputFormat.JSON:
        click.echo(result.model_dump_json(indent=2))
        return

    if result.is_content_equal:
        console.print("[yellow]Files are identical.[/yellow]")
        return

    console.print(f"[bold]--- {escape(old_file)}[/bold]")
    console.print(f"[bold]+++ {escape(new_file)}[/bold]")
    if OutputFormat(output_format) == OutputFormat.TEXT:
        console.print(render_text(result), end="")
    else:
        console.print(render_table(result))


@main.command()
@click.argument("old_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("new_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("index", type=int)
@context_option
def select(old_file: str, new_file: str, index: int, context: int | None):
    """Print the selection event for one line of the diff."""
    try:
        inline_diff = _build_diff(old_file, new_file, context)
        event = inline_diff.select_line(index)
    except IndexError as e:
        console.print(f"[red]{str(e)}[/red]")
        raise SystemExit(1) from e
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Could not read input files: {escape(str(e))}[/red]")
        raise SystemExit(1) from e
    except ServiceError as e:
        console.print(f"[red]Diff failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from e

    click.echo(event.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
