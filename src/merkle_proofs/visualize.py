"""
Merkle Proof Visualization Module

This module renders inclusion proofs as trees in the terminal, helping users
see the path from the root down to the proved leaf and which side each
sibling digest sits on.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.tree import Tree as RichTree

from .merkle.proof import Proof, Side


def _short(digest: bytes, width: int = 16) -> str:
    hex_str = digest.hex()
    if len(hex_str) <= width:
        return hex_str
    return f"{hex_str[:width // 2]}…{hex_str[-width // 2:]}"


def build_proof_tree(proof: Proof, full: bool = False) -> RichTree:
    """
    Build a rich tree following the lemma chain of ``proof``.

    Each level shows its node digest; its children are the sibling digest and
    the next level down, ordered left to right as in the original tree.
    """
    fmt = (lambda d: d.hex()) if full else _short

    root = RichTree(f"[bold cyan]root[/bold cyan] {fmt(proof.lemma.node_hash)}")
    branch = root
    lemma = proof.lemma
    depth = 0
    while lemma.sub_lemma is not None and lemma.sibling_hash is not None:
        sibling = lemma.sibling_hash
        sub = lemma.sub_lemma
        depth += 1
        sibling_label = f"[dim]sibling ({sibling.side.value})[/dim] {fmt(sibling.value)}"
        if sub.sub_lemma is None:
            path_label = f"[bold green]leaf[/bold green] {fmt(sub.node_hash)}"
        else:
            path_label = f"[cyan]level {depth}[/cyan] {fmt(sub.node_hash)}"

        if sibling.side is Side.LEFT:
            branch.add(sibling_label)
            next_branch = branch.add(path_label)
        else:
            next_branch = branch.add(path_label)
            branch.add(sibling_label)

        branch = next_branch
        lemma = sub

    if depth == 0:
        root.label = f"[bold green]root = leaf[/bold green] {fmt(proof.lemma.node_hash)}"
    return root


def visualize_proof(proof: Proof, console: Optional[Console] = None, full: bool = False):
    """
    Print a proof summary panel followed by its lemma tree.

    Args:
        proof: Proof to render
        console: Console to print to (a new one if None)
        full: Show full digests instead of abbreviated ones
    """
    console = console or Console()

    summary = (
        f"Value: {proof.value!r}\n"
        f"Algorithm: {proof.algorithm.name}\n"
        f"Leaf index: {proof.index()}\n"
        f"Proof length: {proof.lemma.depth} steps\n"
        f"Root hash: {proof.root_hash.hex()}"
    )
    console.print(Panel(summary, title="Merkle Proof", border_style="cyan"))
    console.print(build_proof_tree(proof, full=full))
