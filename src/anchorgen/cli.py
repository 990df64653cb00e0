"""
CLI entry point for the Anchor client generator.

Usage:
    anchorgen generate
    anchorgen render program/idl/feedana.json --program-id <ID> --network devnet
    anchorgen derive program/idl/feedana.json vault --program-id <ID> --value amount=5
    anchorgen inspect program/idl/feedana.json
"""

import argparse
import json
import logging
import sys
from typing import Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from anchorgen.analysis import IDLParser, ProgramMetadata, ConstSeed, AccountSeed, ArgSeed
from anchorgen.config import GeneratorConfig
from anchorgen.errors import AnchorgenError, ConfigNotFoundError

console = Console()


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def run_generate(args: argparse.Namespace) -> int:
    """Generate clients for every program in the manifest."""
    from anchorgen.core import ClientGenerator

    config = GeneratorConfig.from_env()
    if args.programs_file:
        config.programs_file = args.programs_file
    if args.client_dir:
        config.client_dir = args.client_dir

    console.print()
    console.print(Panel(
        f"[dim]Manifest: {config.programs_file}[/dim]\n"
        f"[dim]Output: {config.client_dir}[/dim]",
        title="[bold]TypeScript Client Generation[/bold]",
    ))
    console.print()

    generator = ClientGenerator(config=config)

    def progress_callback(current, total, program):
        console.print(
            f"[cyan]⚙[/cyan] Generating client for [bold]{program.name}[/bold] "
            f"([yellow]{program.network}[/yellow]) from "
            f"[dim]{generator.source.describe(program)}[/dim]..."
        )

    try:
        report = generator.run(progress_callback=progress_callback)
    except ConfigNotFoundError as e:
        console.print(f"[red]✗ Configuration error: {e}[/red]")
        return 1

    for result in report.results:
        if result.success:
            console.print(f"[green]✓ Generated {result.output_path}[/green]")
        else:
            console.print(f"[red]✗ {result.program_name}: {result.error}[/red]")

    console.print()
    if report.generated_count == 0:
        console.print("[yellow]⚠ No client files generated. Make sure IDL files are available.[/yellow]")
    else:
        plural = "" if report.generated_count == 1 else "s"
        console.print(f"[green]✓ Generated {report.generated_count} client{plural}![/green]")

    if args.output:
        with open(args.output, "w") as f:
            json.dump(report.to_dict(), f, indent=2)
        console.print(f"\n[dim]Report exported to: {args.output}[/dim]")

    return 0 if report.failed_count == 0 else 1


def run_render(args: argparse.Namespace) -> int:
    """Render a single client from an IDL file."""
    from anchorgen.codegen import generate_client

    try:
        idl = IDLParser().parse_file(args.idl)
    except FileNotFoundError:
        console.print(f"[red]Error: IDL file not found: {args.idl}[/red]")
        return 1
    except AnchorgenError as e:
        console.print(f"[red]Error parsing IDL: {e}[/red]")
        return 1

    program_id = args.program_id or idl.address
    if not program_id:
        console.print("[red]Error: --program-id is required (the IDL has no address)[/red]")
        return 1

    program = ProgramMetadata(
        name=args.name or idl.name or "program",
        program_id=program_id,
        network=args.network,
        idl_path=args.idl_import,
    )

    try:
        code = generate_client(idl, program, GeneratorConfig.from_env())
    except AnchorgenError as e:
        console.print(f"[red]Error generating client: {e}[/red]")
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(code)
        console.print(f"[green]✓ Generated {args.output}[/green]")
    else:
        sys.stdout.write(code)
    return 0


def _parse_values(pairs: List[str]) -> Dict[str, str]:
    values = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Expected name=value, got: {pair}")
        key, value = pair.split("=", 1)
        values[key.strip()] = value.strip()
    return values


def run_derive(args: argparse.Namespace) -> int:
    """Derive one PDA locally."""
    from anchorgen.core.derivation import derive_account_address

    try:
        idl = IDLParser().parse_file(args.idl)
        values = _parse_values(args.value)
        program_id = args.program_id or idl.address
        if not program_id:
            console.print("[red]Error: --program-id is required (the IDL has no address)[/red]")
            return 1
        address, bump = derive_account_address(idl, args.account, program_id, values)
    except KeyError as e:
        console.print(f"[red]Error: missing seed value {e}; pass it with --value name=value[/red]")
        return 1
    except (AnchorgenError, FileNotFoundError, ValueError, TypeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    console.print(f"[green]✓ {args.account}[/green]")
    console.print(f"  Address: [bold]{address}[/bold]")
    console.print(f"  Bump: {bump}")
    return 0


def _describe_seed(seed) -> str:
    if isinstance(seed, ConstSeed):
        if not isinstance(seed.value, bytes):
            return "const ?"
        try:
            return f"const '{seed.value.decode('utf-8')}'"
        except UnicodeDecodeError:
            return f"const 0x{seed.value.hex()}"
    if isinstance(seed, (AccountSeed, ArgSeed)):
        return f"{seed.kind} {seed.path}"
    return f"[red]{seed.kind}[/red]"


def run_inspect(args: argparse.Namespace) -> int:
    """Show instructions, accounts and PDA seeds of an IDL."""
    try:
        idl = IDLParser().parse_file(args.idl)
    except FileNotFoundError:
        console.print(f"[red]Error: IDL file not found: {args.idl}[/red]")
        return 1
    except AnchorgenError as e:
        console.print(f"[red]Error parsing IDL: {e}[/red]")
        return 1

    console.print(f"[bold]{idl.name or args.idl}[/bold]  [dim]{idl.address or ''}[/dim]")
    for ix in idl.instructions:
        table = Table(title=ix.name)
        table.add_column("Account", style="cyan")
        table.add_column("Roles")
        table.add_column("Resolution")

        for acc in ix.accounts:
            roles = []
            if acc.is_writable():
                roles.append("writable")
            if acc.is_signer():
                roles.append("signer")
            if acc.pda is not None:
                resolution = ", ".join(_describe_seed(s) for s in acc.pda.seeds)
            elif acc.address:
                resolution = acc.address
            else:
                resolution = "[dim]-[/dim]"
            table.add_row(acc.name, " ".join(roles), resolution)

        console.print(table)
        if ix.args:
            arg_list = ", ".join(f"{a.name}: {a.type_string}" for a in ix.args)
            console.print(f"  [dim]args: {arg_list}[/dim]")
        console.print()
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="anchorgen",
        description="Generate TypeScript clients for Anchor programs",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate command
    generate_parser = subparsers.add_parser("generate", help="Generate clients for all configured programs")
    generate_parser.add_argument(
        "--programs-file",
        type=str,
        help="Programs manifest (default: SolanaPrograms.json)"
    )
    generate_parser.add_argument(
        "--client-dir",
        type=str,
        help="Output directory (default: ./program/client)"
    )
    generate_parser.add_argument(
        "--output", "-o",
        type=str,
        help="Output file for JSON report"
    )

    # render command
    render_parser = subparsers.add_parser("render", help="Render a client from one IDL file")
    render_parser.add_argument("idl", type=str, help="Path to Anchor IDL JSON file")
    render_parser.add_argument("--program-id", "-p", type=str, help="Deployed program ID")
    render_parser.add_argument(
        "--network", "-n",
        type=str,
        default="devnet",
        help="Network to use (default: devnet)"
    )
    render_parser.add_argument("--name", type=str, help="Program name (default: from IDL)")
    render_parser.add_argument("--idl-import", type=str, help="Custom IDL path for the import")
    render_parser.add_argument("--output", "-o", type=str, help="Write client to this file")

    # derive command
    derive_parser = subparsers.add_parser("derive", help="Derive a PDA locally")
    derive_parser.add_argument("idl", type=str, help="Path to Anchor IDL JSON file")
    derive_parser.add_argument("account", type=str, help="PDA account name")
    derive_parser.add_argument("--program-id", "-p", type=str, help="Deployed program ID")
    derive_parser.add_argument(
        "--value",
        action="append",
        help="Seed value as name=value (repeatable)"
    )

    # inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show instructions and PDA seeds")
    inspect_parser.add_argument("idl", type=str, help="Path to Anchor IDL JSON file")

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "generate":
        return run_generate(args)
    elif args.command == "render":
        return run_render(args)
    elif args.command == "derive":
        return run_derive(args)
    elif args.command == "inspect":
        return run_inspect(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
