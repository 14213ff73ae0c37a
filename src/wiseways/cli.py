from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from .analysis.classify import classify
from .analysis.terms import extract_key_terms
from .config import Settings
from .graph.analytics import compute_analytics
from .graph.links import EMBEDDING_WEIGHT, SEMANTIC_WEIGHT, score_pair
from .graph.models import GraphSnapshot
from .graph.store import EngineError, GraphStore


app = typer.Typer(add_completion=False, help="WiseWays: classify questions, link them, find thinking rooms.")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details")):
    settings = Settings()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def terms(text: str = typer.Argument(...)):
    """Show the weighted key terms of a text."""
    weights = extract_key_terms(text)
    if not weights:
        console.print("No key terms.", style="yellow")
        return

    table = Table(title="Key Terms")
    table.add_column("term")
    table.add_column("weight", justify="right")
    for term, w in sorted(weights.items(), key=lambda tw: tw[1], reverse=True):
        table.add_row(Text(term), f"{w:.1f}")
    console.print(table)


@app.command("classify")
def classify_cmd(text: str = typer.Argument(...)):
    """Classify a text by need, dimension and pipeline score."""
    c = classify(text)
    console.print(f"need: {c.need}", markup=False)
    console.print(f"dimension: {c.dimension}", markup=False)
    console.print(f"pipeline score: {c.pipeline_score:.3f} (0 = strategic, 1 = execution)", markup=False)


@app.command()
def compare(
    text_a: str = typer.Argument(...),
    text_b: str = typer.Argument(...),
):
    """Explain how strongly two questions would be linked."""
    store = GraphStore()
    try:
        a = store.make_node(text_a)
        b = store.make_node(text_b)
    except EngineError as e:
        console.print(str(e), style="red")
        raise typer.Exit(code=2)

    s = score_pair(a, b)
    table = Table(title="Link Signals")
    table.add_column("signal")
    table.add_column("raw", justify="right")
    table.add_column("contribution", justify="right")
    table.add_row("semantic", f"{s.semantic:.3f}", f"{s.semantic * SEMANTIC_WEIGHT:.3f}")
    table.add_row("embedding", f"{s.embedding:.3f}", f"{s.embedding * EMBEDDING_WEIGHT:.3f}")
    table.add_row(f"same need ({a.need} / {b.need})", "", f"{s.same_need:.3f}")
    table.add_row(f"same dimension ({a.dimension} / {b.dimension})", "", f"{s.same_dimension:.3f}")
    table.add_row("pipeline proximity", f"{1 - abs(a.pipeline_score - b.pipeline_score):.3f}", f"{s.pipeline:.3f}")
    table.add_row(f"causal ({s.causal.type or 'none'})", "", f"{s.causal.score:.3f}")
    table.add_row(Text("combined", style="bold"), "", Text(f"{s.weight:.3f}", style="bold"))
    console.print(table)
    console.print(s.reason, markup=False)


@app.command()
def build(
    input: Path = typer.Option(..., "--input", exists=True, file_okay=True, dir_okay=False, help="One question per line"),
    threshold: float | None = typer.Option(None, help="Minimum combined weight for a link"),
    max_per_node: int | None = typer.Option(None, "--max-per-node", help="Max links kept per source question"),
    out: Path | None = typer.Option(None, "--out", help="Write the graph snapshot as JSON"),
):
    """Build the question graph from a text file."""
    lines = [ln.strip() for ln in input.read_text(encoding="utf-8").splitlines()]
    texts = [ln for ln in lines if ln]
    if not texts:
        raise typer.BadParameter("No questions found in input file.")

    store = GraphStore()
    try:
        store.replace_questions(texts)
        if threshold is not None or max_per_node is not None:
            store.recompute_links(threshold=threshold, max_per_node=max_per_node)
    except EngineError as e:
        console.print(str(e), style="red")
        raise typer.Exit(code=2)

    snap = store.snapshot()
    _print_links(snap)
    _print_rooms(snap)
    _print_analytics(snap)
    if out is not None:
        _write_snapshot(snap, out)


@app.command()
def demo(
    out: Path | None = typer.Option(None, "--out", help="Write the graph snapshot as JSON"),
):
    """Seed the bilingual demo questions and show rooms + analytics."""
    store = GraphStore()
    snap = store.seed_demo()
    console.print(f"Seeded {len(snap.nodes)} questions, {len(snap.links)} links, {len(snap.rooms)} rooms")
    _print_rooms(snap)
    _print_analytics(snap)
    if out is not None:
        _write_snapshot(snap, out)


def _print_links(snap: GraphSnapshot, limit: int = 20) -> None:
    texts = {n.id: n.text for n in snap.nodes}
    table = Table(title=f"Strongest Links ({len(snap.links)} total)")
    table.add_column("weight", justify="right", width=7)
    table.add_column("question A")
    table.add_column("question B")
    table.add_column("reason")
    for l in sorted(snap.links, key=lambda l: l.weight, reverse=True)[:limit]:
        table.add_row(
            Text(f"{l.weight:.3f}"),
            Text(_preview(texts[l.source])),
            Text(_preview(texts[l.target])),
            Text(l.reason),
        )
    console.print(table)


def _print_rooms(snap: GraphSnapshot) -> None:
    if not snap.rooms:
        console.print("No thinking rooms (no strongly connected questions).", style="yellow")
        return
    texts = {n.id: n.text for n in snap.nodes}
    for r in snap.rooms:
        console.print("\n" + "=" * 80, markup=False)
        console.print(f"{r.name} ({len(r.question_ids)} questions, {r.strength:.1f}%)", markup=False, style="bold")
        console.print(f"theme: {r.theme}", markup=False)
        for qid in r.question_ids:
            console.print(f"- {texts[qid]}", markup=False)


def _print_analytics(snap: GraphSnapshot) -> None:
    a = compute_analytics(snap)
    table = Table(title="Analytics")
    table.add_column("Metric")
    table.add_column("Value")
    table.add_row("Questions", str(a["totalQuestions"]))
    table.add_row("Links", str(a["totalLinks"]))
    table.add_row("Link strength", ", ".join(f"{k}={v}" for k, v in a["linkStrength"].items()))
    table.add_row("Rooms", str(a["totalRooms"]))
    table.add_row("Response rate", f"{a['responseRate']:.1f}%")
    console.print(table)

    t2 = Table(title="Questions by Need")
    t2.add_column("need")
    t2.add_column("count")
    for need, n in sorted(a["needDistribution"].items(), key=lambda kv: kv[1], reverse=True):
        t2.add_row(need, str(n))
    console.print(t2)


def _write_snapshot(snap: GraphSnapshot, out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(snap.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    console.print(f"Wrote snapshot to {out}")


def _preview(text: str, n: int = 50) -> str:
    t = " ".join(text.split())
    return t if len(t) <= n else t[:n].rstrip() + "..."


if __name__ == "__main__":
    app()
