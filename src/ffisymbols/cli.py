"""CLI for the FFI binding generator."""

import click
from pathlib import Path
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
import sys

from ffisymbols.config import load_config, GeneratorConfig, OUTPUT_FORMATS
from ffisymbols.generator import Generator
from ffisymbols.resolution.mapper import POLICIES

console = Console()


@click.command()
@click.option("--header", "headers", multiple=True, help="Header or binding stub to read (repeatable)")
@click.option("--module", "module_name", default=None, help="Name of the generated module")
@click.option("--lib", "ffi_lib", default=None, help="Native library to bind")
@click.option("--prefix", "prefixes", multiple=True, help="Prefix stripped from generated names (repeatable)")
@click.option("--out", default=None, help="Output file (printed to stdout when omitted)")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Output format (defaults to the output file's extension)")
@click.option("--config", default=None, help="Path to configuration file")
@click.option("--policy", type=click.Choice(POLICIES), default=None, help="Symbol naming policy")
@click.option("--symbol-prefix", default=None, help="Prefix for symbols under the prefix policies")
@click.option("--skip-invalid", is_flag=True, default=False, help="Skip declarations with invalid overrides")
def main(
    headers: tuple,
    module_name: str,
    ffi_lib: str,
    prefixes: tuple,
    out: str,
    output_format: str,
    config: str,
    policy: str,
    symbol_prefix: str,
    skip_invalid: bool
) -> None:
    """FFI Symbol Binding Generator.

    Reads C headers, Python stubs or Java interfaces and writes a binding in
    which every function is attached under its resolved native symbol.
    """
    # Keep stdout clean for the generated code
    status = Console(stderr=True) if not out else console

    try:
        cfg = load_config(config) if config else GeneratorConfig.load_default()
        if headers:
            cfg.headers = list(headers)
        if module_name:
            cfg.module_name = module_name
        if ffi_lib:
            cfg.ffi_lib = ffi_lib
        if prefixes:
            cfg.prefixes = list(prefixes)
        if out:
            cfg.output = out
        if output_format:
            cfg.output_format = output_format
        elif out and Path(out).suffix == ".json":
            cfg.output_format = "json"
        if policy:
            cfg.naming.policy = policy
        if symbol_prefix is not None:
            cfg.naming.prefix = symbol_prefix
        if skip_invalid:
            cfg.naming.on_invalid_override = "skip"

        generator = Generator(cfg)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=status
        ) as progress:

            # Step 1: Extract declarations
            task = progress.add_task("[cyan]Reading declarations...", total=None)
            store = generator.declarations()
            progress.update(task, completed=True)

            stats = store.get_stats()
            status.print(f"✓ Found {stats['total_declarations']} declarations in {stats['unique_files']} files")

            # Step 2: Resolve symbols
            task = progress.add_task("[cyan]Resolving symbols...", total=None)
            symbols = generator.resolve_symbols()
            progress.update(task, completed=True)

            status.print(f"✓ Resolved {len(symbols)} symbols ({stats['overridden']} overridden)")
            for name, error in generator.skipped:
                status.print(f"[yellow]Warning: Skipped {name}: {error}[/yellow]")

            # Step 3: Write output
            task = progress.add_task("[cyan]Writing binding...", total=None)
            code = generator.render(symbols)
            progress.update(task, completed=True)

        if cfg.output:
            output_path = Path(cfg.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w") as f:
                f.write(code)
        else:
            click.echo(code, nl=False)

        table = Table(title="Overridden Symbols")
        table.add_column("Declaration", style="cyan")
        table.add_column("Symbol", style="green")
        table.add_column("Source")
        for symbol in symbols:
            if symbol.is_overridden:
                table.add_row(
                    symbol.declaration.name,
                    symbol.symbol,
                    f"{symbol.declaration.source_file}:{symbol.declaration.line_number}"
                )

        if table.row_count:
            status.print(table)
        if cfg.output:
            status.print(f"[dim]Binding saved to: {Path(cfg.output).absolute()}[/dim]")

    except Exception as e:
        Console(stderr=True).print(f"[bold red]Error: {e}[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
