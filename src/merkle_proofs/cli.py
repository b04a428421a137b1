#!/usr/bin/env python3
"""
Merkle Proofs CLI

Command-line interface for building Merkle trees over value files and for
generating, verifying and inspecting inclusion proofs.
"""

import json
import logging
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.table import Table

from .config import get_settings
from .main import (
    build_tree,
    generate_nth_proof,
    generate_proof,
    load_values,
    verify_proof,
)
from .merkle import UnsupportedAlgorithmError, get_algorithm
from .serialization import ProofFormatError, proof_from_dict
from .utils.hex_helpers import bytes_to_hex
from .visualize import visualize_proof

# Configure rich console
console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def format_json(data: Dict[str, Any]) -> str:
    """Format a result for JSON output."""
    return json.dumps(data, indent=2)


def read_proof_file(proof_file: str) -> Dict[str, Any]:
    """
    Read a serialized proof.

    Accepts either a bare proof object or the output of ``prove`` (which wraps
    the proof together with the root and metadata).
    """
    with open(proof_file, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"{proof_file} is not valid JSON: {e}")
    if isinstance(data, dict) and "lemma" not in data and isinstance(data.get("proof"), dict):
        data = data["proof"]
    return data


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--algorithm",
    "-a",
    envvar="MERKLE_HASH_ALGORITHM",
    default="sha256",
    show_default=True,
    help="Hash algorithm (sha1, sha256, sha384, sha512, blake2b, blake2s)",
)
@click.pass_context
def cli(ctx, verbose: bool, algorithm: str):
    """
    Merkle Proofs CLI - Build Merkle trees and prove value membership.

    Values files are either a JSON array of strings or plain text with one
    value per line.
    """
    setup_logging(verbose)
    try:
        algo = get_algorithm(algorithm)
    except UnsupportedAlgorithmError as e:
        raise click.BadParameter(str(e), param_hint="--algorithm")
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["algorithm"] = algo


@cli.command()
@click.argument("values_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "format_output",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def root(ctx, values_file: str, format_output: str):
    """
    Compute the root hash of a values file.

    VALUES_FILE: Path to the values to build the tree from
    """
    try:
        values = load_values(values_file)
        tree = build_tree(values, ctx.obj["algorithm"])
    except ValueError as e:
        logger.error(f"Error building tree: {e}")
        raise click.ClickException(str(e))

    if format_output == "json":
        print(format_json({
            "root_hash": bytes_to_hex(tree.root_hash),
            "count": tree.count,
            "height": tree.height,
            "algorithm": tree.algorithm.name,
        }))
        return

    table = Table(title="Merkle Tree")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Root Hash", bytes_to_hex(tree.root_hash))
    table.add_row("Leaves", str(tree.count))
    table.add_row("Height", str(tree.height))
    table.add_row("Algorithm", tree.algorithm.name)
    console.print(table)


@cli.command()
@click.argument("values_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("value", required=False)
@click.option("--index", "-i", type=int, help="Prove the leaf at this position instead of a value")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the proof to this file")
@click.pass_context
def prove(ctx, values_file: str, value: Optional[str], index: Optional[int], output: Optional[str]):
    """
    Generate an inclusion proof.

    VALUES_FILE: Path to the values to build the tree from

    VALUE: Value to prove (omit when using --index)
    """
    if (value is None) == (index is None):
        raise click.UsageError("Give exactly one of VALUE and --index")

    try:
        values = load_values(values_file)
        if value is not None:
            result = generate_proof(values, value, ctx.obj["algorithm"])
            if result is None:
                raise click.ClickException(f"Value {value!r} is not in {values_file}")
        else:
            result = generate_nth_proof(values, index, ctx.obj["algorithm"])
    except ValueError as e:
        logger.error(f"Error generating proof: {e}")
        raise click.ClickException(str(e))

    text = format_json(result.to_dict())
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        console.print(f"[green]Proof written to {output}[/green]")
    else:
        print(text)


@cli.command()
@click.argument("proof_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--root", "root_hash", required=True, help="Trusted root hash (hex string)")
@click.pass_context
def verify(ctx, proof_file: str, root_hash: str):
    """
    Verify an inclusion proof against a trusted root hash.

    Exits with status 1 when the proof is invalid.

    PROOF_FILE: Path to a proof produced by the prove command
    """
    data = read_proof_file(proof_file)
    try:
        valid = verify_proof(data, root_hash, ctx.obj["algorithm"])
    except ProofFormatError as e:
        logger.error(f"Malformed proof: {e}")
        raise click.ClickException(f"Malformed proof: {e}")
    except ValueError as e:
        logger.error(f"Error verifying proof: {e}")
        raise click.ClickException(str(e))

    if valid:
        console.print("[bold green]Proof is valid[/bold green]")
    else:
        console.print("[bold red]Proof is INVALID[/bold red]")
        ctx.exit(1)


@cli.command()
@click.argument("values_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def leaves(ctx, values_file: str):
    """
    List the leaves of a values file with their leaf digests.

    VALUES_FILE: Path to the values to build the tree from
    """
    try:
        values = load_values(values_file)
    except ValueError as e:
        raise click.ClickException(str(e))

    algorithm = ctx.obj["algorithm"]
    tree = build_tree(values, algorithm)

    table = Table(title=f"Leaves ({tree.count})")
    table.add_column("Index", style="cyan", justify="right")
    table.add_column("Value", style="green")
    table.add_column("Leaf Hash", style="dim")
    for i, leaf_value in enumerate(tree):
        table.add_row(str(i), leaf_value, algorithm.hash_leaf(leaf_value).hex())
    console.print(table)


@cli.command()
@click.argument("proof_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--full", is_flag=True, help="Show full digests")
@click.pass_context
def visualize(ctx, proof_file: str, full: bool):
    """
    Render the lemma chain of a proof as a tree.

    PROOF_FILE: Path to a proof produced by the prove command
    """
    data = read_proof_file(proof_file)
    try:
        proof = proof_from_dict(data, ctx.obj["algorithm"])
    except ProofFormatError as e:
        raise click.ClickException(f"Malformed proof: {e}")
    visualize_proof(proof, console=console, full=full)


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: MERKLE_API_HOST)")
@click.option("--port", type=int, default=None, help="Port to bind to (default: MERKLE_API_PORT)")
@click.option("--dev", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], dev: bool):
    """Start the REST API server."""
    from .api.rest_api import run_server

    try:
        settings = get_settings()
    except ValueError as e:
        raise click.ClickException(str(e))
    host = host or settings.api_host
    port = port or settings.api_port
    console.print(f"[cyan]Starting Merkle Proofs API on {host}:{port}[/cyan]")
    run_server(host=host, port=port, dev=dev)


if __name__ == "__main__":
    cli()
