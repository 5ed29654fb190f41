"""Rich output formatting helpers for the xsspage CLI.

Severity Color Mapping:
    CRITICAL = bold red, HIGH = yellow, MEDIUM = cyan, LOW = green
"""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from xsspage.core.csp import CSPTemplate, CSPVerdict, ParsedCSP, SecurityScore
from xsspage.core.dom import RiskScore, ScanResult, get_remediation_advice
from xsspage.core.fuzzer import FilterVerdict, Mutation, format_strategy_name
from xsspage.core.challenges import ChallengeResult
from xsspage.core.payloads import DetectionResult, GeneratedPayload, PayloadRecord
from xsspage.core.severity import Severity

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "yellow",
    Severity.MEDIUM: "cyan",
    Severity.LOW: "green",
}

# CSP rating colors are CSS names; map them onto terminal styles.
_RATING_STYLES: dict[str, str] = {
    "green": "bold green",
    "blue": "blue",
    "yellow": "yellow",
    "orange": "dark_orange",
    "red": "bold red",
}

console = Console()


def severity_style(severity: Severity) -> str:
    """Return the Rich style string for a given severity level."""
    return _SEVERITY_STYLES.get(severity, "white")


def severity_text(severity: Severity) -> Text:
    return Text(severity.name, style=severity_style(severity))


def _shorten(text: str, width: int = 80) -> str:
    flat = text.replace("\n", "\\n").replace("\t", "\\t").replace("\x00", "\\0")
    return flat if len(flat) <= width else flat[: width - 3] + "..."


# ---------------------------------------------------------------------------
# Fuzzer
# ---------------------------------------------------------------------------


def print_mutations(
    mutations: list[Mutation],
    total: int,
    verdicts: list[FilterVerdict] | None = None,
    simulated: dict[str, str] | None = None,
) -> None:
    """Print a table of mutations, with filter verdicts when available."""
    if not mutations:
        console.print("[dim]No mutations generated.[/dim]")
        return

    table = Table(title="Payload Mutations", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Strategy", style="bold")
    table.add_column("Encoding", style="dim")
    table.add_column("Payload")
    if verdicts is not None:
        table.add_column("Filter", justify="center")
    if simulated is not None:
        table.add_column("After Filter", style="dim")

    by_payload = {v.payload: v for v in verdicts or ()}
    for index, mutation in enumerate(mutations, start=1):
        row: list[Any] = [
            str(index),
            format_strategy_name(mutation.strategy),
            mutation.encoding,
            Text(_shorten(mutation.payload)),
        ]
        if verdicts is not None:
            verdict = by_payload.get(mutation.payload)
            if verdict is None or not verdict.blocked:
                row.append(Text("BYPASS", style="bold green"))
            else:
                row.append(Text("BLOCKED", style="bold red"))
        if simulated is not None:
            row.append(Text(_shorten(simulated.get(mutation.payload, ""))))
        table.add_row(*row)

    console.print(table)
    summary = f"[bold]{len(mutations)}[/bold] of {total} mutations shown"
    if verdicts is not None:
        bypassed = sum(1 for v in verdicts if not v.blocked)
        summary += f" | [green]{bypassed} bypass the filter[/green]"
    console.print(summary)


# ---------------------------------------------------------------------------
# DOM scanner
# ---------------------------------------------------------------------------


def print_scan_result(result: ScanResult, risk: RiskScore, framework: str) -> None:
    """Print findings, inferred flows and known patterns for one scan."""
    header = Text.assemble(
        ("Framework: ", "bold"), (framework, ""),
        ("  Risk: ", "bold"), (f"{risk.score}/100 ", ""),
        (risk.level.upper(), severity_style(Severity.parse(risk.level))),
    )
    console.print(Panel(header, title="DOM XSS Scan"))
    console.print(f"  {risk.description}")

    if not result.findings:
        console.print("[green]No dangerous sinks or untrusted sources found.[/green]")
        return

    table = Table(title="Findings", show_header=True)
    table.add_column("Severity", justify="center")
    table.add_column("Type")
    table.add_column("Name", style="bold")
    table.add_column("Line:Col", justify="right")
    table.add_column("Snippet", style="dim")
    for f in result.findings:
        table.add_row(
            severity_text(f.severity), f.type, Text(f.name),
            f"{f.line}:{f.column}", Text(_shorten(f.snippet, 60)),
        )
    console.print(table)

    if result.data_flows:
        flows = Table(title="Possible Data Flows (heuristic)", show_header=True)
        flows.add_column("Source", style="bold")
        flows.add_column("Sink", style="bold")
        flows.add_column("Lines", justify="right")
        flows.add_column("Confidence", justify="center")
        for flow in result.data_flows:
            flows.add_row(
                Text(flow.source), Text(flow.sink),
                f"{flow.source_line} -> {flow.sink_line}", flow.confidence,
            )
        console.print(flows)

    for match in result.known_patterns:
        console.print(
            f"  [{severity_style(match.severity)}]{escape(match.name)}[/]: "
            f"{escape(match.fix)}"
        )

    sinks = dict.fromkeys(f.name for f in result.findings if f.type == "sink")
    for name in sinks:
        advice = get_remediation_advice(name)
        if advice.title == "General Recommendations":
            continue
        console.print(f"\n[bold]{escape(advice.title)}[/bold]")
        for alt in advice.alternatives:
            console.print(f"  - {escape(alt.name)}: {escape(alt.description)}")


# ---------------------------------------------------------------------------
# CSP
# ---------------------------------------------------------------------------


def print_csp_analysis(parsed: ParsedCSP, score: SecurityScore) -> None:
    style = _RATING_STYLES.get(score.color, "white")
    console.print(Panel(
        Text.assemble(
            ("Score: ", "bold"), (f"{score.score}/100  ", ""),
            (score.rating, style),
        ),
        title="CSP Analysis",
    ))

    if parsed.errors:
        for error in parsed.errors:
            console.print(f"[bold red]Error:[/bold red] {escape(error)}")
        return

    table = Table(title="Directives", show_header=True)
    table.add_column("Directive", style="bold")
    table.add_column("Values")
    for directive in parsed.directives.values():
        table.add_row(Text(directive.name), Text(" ".join(directive.values) or "-"))
    console.print(table)

    for warning in parsed.warnings or ():
        console.print(f"  [yellow]![/yellow] {escape(warning)}")
    if score.issues:
        console.print("\n[bold]Score breakdown[/bold]")
        for issue in score.issues:
            console.print(f"  - {escape(issue)}")


def print_csp_verdict(verdict: CSPVerdict) -> None:
    status = (
        Text("BLOCKED", style="bold green") if verdict.blocked
        else Text("ALLOWED", style="bold red")
    )
    console.print(Panel(
        Text.assemble(
            ("Verdict: ", "bold"), status,
            ("  Severity: ", "bold"), severity_text(verdict.severity),
            ("  Directive: ", "bold"), (verdict.directive or "-", ""),
        ),
        title="CSP Payload Test",
    ))
    console.print(f"  {escape(verdict.reason)}")
    if verdict.recommendation:
        console.print(f"  [cyan]Recommendation:[/cyan] {escape(verdict.recommendation)}")


def print_csp_templates(templates: dict[str, CSPTemplate]) -> None:
    for key, template in templates.items():
        body = Text.assemble(
            (template.description + "\n\n", ""),
            (template.policy, "bold"),
            ("\n\nPros: ", "green"), (", ".join(template.pros), ""),
            ("\nCons: ", "red"), (", ".join(template.cons), ""),
        )
        console.print(Panel(body, title=escape(f"{template.name} [{key}]")))


# ---------------------------------------------------------------------------
# Generator, detector, progress
# ---------------------------------------------------------------------------


def print_generated(payloads: list[GeneratedPayload]) -> None:
    table = Table(title="Generated Payloads", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Category", style="bold")
    table.add_column("Technique", style="dim")
    table.add_column("Payload")
    for index, generated in enumerate(payloads, start=1):
        table.add_row(
            str(index), generated.category, generated.technique,
            Text(_shorten(generated.payload, 100)),
        )
    console.print(table)


def print_detection(result: DetectionResult) -> None:
    if not result.patterns:
        console.print("[green]No XSS indicators detected.[/green]")
    else:
        console.print(Panel(
            Text.assemble(
                ("Severity: ", "bold"), severity_text(result.severity),
                ("  Confidence: ", "bold"), (result.confidence, ""),
            ),
            title="XSS Indicators",
        ))
        for pattern in result.patterns:
            console.print(f"  - {escape(pattern)}")
    console.print(f"[dim]{escape(result.note)}[/dim]")


def print_search_results(records: list[PayloadRecord], count: int) -> None:
    if not records:
        console.print("[yellow]No payloads match.[/yellow]")
        return
    table = Table(
        title=f"Payload Database ({len(records)} of {count})",
        show_header=True,
        header_style="bold",
    )
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Severity")
    table.add_column("Category", style="bold")
    table.add_column("Technique", style="dim")
    table.add_column("Payload")
    for record in records:
        table.add_row(
            str(record.id),
            severity_text(record.severity),
            record.category,
            record.technique,
            Text(_shorten(record.payload, 100)),
        )
    console.print(table)


def print_challenge_result(result: ChallengeResult) -> None:
    if result.success:
        title = Text(f"Solved (+{result.points} points)", style="bold green")
    else:
        title = Text(f"Not solved: {result.reason}", style="bold red")
    body = Text(result.feedback)
    if result.hint:
        body.append(f"\nHint: {result.hint}", style="dim")
    console.print(Panel(body, title=title))
    if result.filtered is not None:
        console.print(Text.assemble(("Filtered:   ", "bold"), result.filtered))
    if result.contextual is not None:
        console.print(Text.assemble(("Rendered:   ", "bold"), result.contextual))
    if result.detection is not None and result.detection.patterns:
        console.print(Text.assemble(
            ("Indicators: ", "bold"), ", ".join(result.detection.patterns),
        ))


def print_progress_stats(stats: dict[str, Any]) -> None:
    table = Table(title="Learning Progress", show_header=True)
    table.add_column("Stat", style="bold")
    table.add_column("Value", justify="right")
    for key, value in stats.items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


def print_json(data: Any) -> None:
    """Print data as indented JSON to stdout, uncolored for piping."""
    click.echo(json.dumps(data, indent=2, default=str))
