"""Command-line interface for ProofStack."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from proofstack import __version__
from proofstack.analysis.evidence_analyzer import EvidenceAnalyzer
from proofstack.analysis.prompts import PROMPTS
from proofstack.models import AnalysisResult, ComplianceResult, EvidenceItem, RuleCategory
from proofstack.output.json_export import JSONExporter
from proofstack.standards.catalog import RuleCatalog
from proofstack.standards.engine import ComplianceEvaluator, coerce_evidence
from proofstack.standards.profiles import PROFILES, get_profile, profile_from_env
from proofstack.utils.exceptions import EvidenceInputError, ProofStackError

console = Console()


def print_status(status: str, message: str) -> None:
    """Print a status message with consistent formatting.

    Args:
        status: Status indicator ([OK], [FAIL], [WARN], [INFO], [ERROR])
        message: Message to display
    """
    color_map = {
        "[OK]": "green",
        "[FAIL]": "red",
        "[WARN]": "yellow",
        "[INFO]": "blue",
        "[ERROR]": "red bold",
    }
    color = color_map.get(status, "white")
    console.print(f"[{color}]{escape(status)}[/{color}] {escape(message)}")


def load_evidence(path: str) -> EvidenceItem:
    """Read one evidence item from a JSON file.

    Raises:
        EvidenceInputError: If the file cannot be read, parsed or validated
    """
    file_path = Path(path)
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise EvidenceInputError(f"Cannot read file: {e.strerror}", source=str(file_path), cause=e) from e
    except json.JSONDecodeError as e:
        raise EvidenceInputError(
            f"Invalid JSON at line {e.lineno}, column {e.colno}", source=str(file_path), cause=e
        ) from e

    if not isinstance(data, dict):
        raise EvidenceInputError("Evidence JSON must be an object", source=str(file_path))

    try:
        return coerce_evidence(data)
    except EvidenceInputError as e:
        raise EvidenceInputError(e.reason, source=str(file_path), cause=e.cause) from e


def _build_evaluator(ctx: click.Context) -> ComplianceEvaluator:
    options = ctx.obj or {}
    rules_path = options.get("rules_path")
    catalog = RuleCatalog.from_file(rules_path) if rules_path else RuleCatalog.default()
    profile_name = options.get("profile")
    profile = get_profile(profile_name) if profile_name else profile_from_env()
    return ComplianceEvaluator(catalog, profile)


@click.group()
@click.version_option(version=__version__, prog_name="proofstack")
@click.option("-v", "--verbose", count=True, help="Verbosity level (-v info, -vv debug)")
@click.option(
    "--rules",
    "rules_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Custom rule catalog (YAML or JSON) merged over the built-in rules",
)
@click.option(
    "--profile",
    type=click.Choice(sorted(PROFILES), case_sensitive=False),
    default=None,
    help="Scoring profile (default: $PROOFSTACK_SCORING_PROFILE or 'default')",
)
@click.pass_context
def main(ctx: click.Context, verbose: int, rules_path: str, profile: str):
    """ProofStack - Rules of evidence compliance scoring.

    Score evidence against the Federal and Indiana Rules of Evidence and
    estimate its likelihood of admissibility.
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["rules_path"] = rules_path
    ctx.obj["profile"] = profile.lower() if profile else None


@main.command()
@click.option(
    "--category",
    type=click.Choice([c.value for c in RuleCategory], case_sensitive=False),
    default=None,
    help="Only list rules in this category",
)
@click.pass_context
def rules(ctx: click.Context, category: str):
    """List the rules in the catalog."""
    try:
        evaluator = _build_evaluator(ctx)
    except ProofStackError as e:
        print_status("[ERROR]", str(e))
        sys.exit(1)

    catalog = evaluator.catalog
    if category:
        selected = [r for r in catalog if r.category.value.lower() == category.lower()]
    else:
        selected = list(catalog)

    table = Table(title=f"Rule Catalog ({escape(catalog.version)})", show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Rule")
    table.add_column("Title")
    table.add_column("Jurisdiction")
    table.add_column("Scored")
    for rule in selected:
        table.add_row(
            escape(rule.rule_id),
            escape(rule.rule_number),
            escape(rule.title),
            rule.jurisdiction.value,
            "yes" if evaluator.is_scorable(rule.rule_id) else "-",
        )
    console.print(table)
    print_status("[INFO]", f"{len(selected)} rule(s)")


@main.command()
@click.argument("rule_id")
@click.argument("evidence_json", type=click.Path(exists=True, dir_okay=False))
@click.option("-f", "--format", "output_format", type=click.Choice(["json", "table"]), default="table")
@click.pass_context
def evaluate(ctx: click.Context, rule_id: str, evidence_json: str, output_format: str):
    """Evaluate evidence against a single rule.

    RULE_ID is a catalog id (fre-901) or legacy id (FRE_1002).
    EVIDENCE_JSON is a JSON file holding one evidence item.
    """
    try:
        evaluator = _build_evaluator(ctx)
        evidence = load_evidence(evidence_json)
        result = evaluator.evaluate_rule(rule_id, evidence)
    except ProofStackError as e:
        print_status("[ERROR]", str(e))
        sys.exit(1)

    if output_format == "json":
        click.echo(JSONExporter(indent=2).to_json(result))
        return

    _print_compliance_table([result], title=f"Rule {escape(rule_id)}")
    _print_findings(result)


@main.command()
@click.argument("evidence_json", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", help="Output file path for JSON report")
@click.option("-f", "--format", "output_format", type=click.Choice(["json", "table"]), default="table")
@click.option("--detailed", is_flag=True, help="Show findings for every rule")
@click.option("--basic", is_flag=True, help="Score the six applicable rules only")
@click.pass_context
def analyze(ctx: click.Context, evidence_json: str, output: str, output_format: str, detailed: bool, basic: bool):
    """Run a full admissibility analysis.

    EVIDENCE_JSON is a JSON file holding one evidence item.
    """
    try:
        evaluator = _build_evaluator(ctx)
        evidence = load_evidence(evidence_json)
        if basic:
            result = evaluator.summarize(evidence)
        else:
            result = EvidenceAnalyzer(evaluator=evaluator).analyze(evidence)
    except ProofStackError as e:
        print_status("[ERROR]", str(e))
        sys.exit(1)

    if output_format == "json" or output:
        exporter = JSONExporter(indent=2)
        if output:
            exporter.to_file(result, output)
            print_status("[OK]", f"Report saved to: {output}")
        else:
            click.echo(exporter.to_json(result))
        return

    _print_analysis(result, evidence, detailed)


@main.command()
@click.argument("evidence_json", type=click.Path(exists=True, dir_okay=False))
@click.option("--kind", type=click.Choice(sorted(PROMPTS)), default="critique", help="Prompt kind")
@click.pass_context
def prompt(ctx: click.Context, evidence_json: str, kind: str):
    """Print a legally grounded narrative prompt for the evidence."""
    try:
        evaluator = _build_evaluator(ctx)
        evidence = load_evidence(evidence_json)
        text = EvidenceAnalyzer(evaluator=evaluator).build_prompt(evidence, kind)
    except ProofStackError as e:
        print_status("[ERROR]", str(e))
        sys.exit(1)

    click.echo(text)


def _print_compliance_table(results, title: str) -> None:
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Rule", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Status")
    for result in results:
        status = "[green][OK][/green]" if result.compliant else "[red][FAIL][/red]"
        table.add_row(escape(result.rule_id), f"{result.score}/{result.max_score}", status)
    console.print(table)
    console.print()


def _print_findings(result: ComplianceResult) -> None:
    finding_colors = {
        "strength": "green",
        "weakness": "red",
        "missing": "yellow",
        "concern": "yellow",
    }
    for finding in result.findings:
        color = finding_colors.get(finding.type.value, "white")
        console.print(
            f"  [{color}]{finding.type.value.upper()}[/{color}] "
            f"{escape(finding.description)} [dim]({escape(finding.rule_reference)}, {finding.impact.value})[/dim]"
        )
    for recommendation in result.recommendations:
        console.print(f"  [blue]->[/blue] {escape(recommendation)}")
    console.print()


def _print_analysis(result: AnalysisResult, evidence: EvidenceItem, detailed: bool) -> None:
    likelihood_colors = {
        "High": "green",
        "Medium": "yellow",
        "Low": "red",
    }
    likelihood = result.admissibility_likelihood.value
    color = likelihood_colors.get(likelihood, "white")
    summary = (
        f"[bold]Evidence:[/bold] {escape(evidence.name or evidence.id or 'unnamed')}\n"
        f"[bold]Overall Score:[/bold] {result.overall_score}%\n"
        f"[{color}]Admissibility Likelihood: {likelihood}[/{color}]"
    )
    if result.authenticity is not None:
        summary += f"\n[bold]Authenticity:[/bold] {result.authenticity.value}"
    console.print(Panel(summary, title="Admissibility Analysis", style="bold"))

    _print_compliance_table(result.rule_compliance, title="Rule Compliance")

    if detailed:
        for compliance in result.rule_compliance:
            console.print(f"[bold cyan]{escape(compliance.rule_id)}[/bold cyan]")
            _print_findings(compliance)

    if result.critical_issues:
        console.print("[bold red]Critical Issues[/bold red]")
        for finding in result.critical_issues:
            console.print(f"  - {escape(finding.description)} [dim]({escape(finding.rule_reference)})[/dim]")
        console.print()

    if result.privilege is not None and result.privilege.redaction_required:
        console.print("[bold yellow]Privilege Review[/bold yellow]")
        for finding in result.privilege.findings:
            console.print(f"  - {escape(finding.description)} [dim]({escape(finding.rule_reference)})[/dim]")
        console.print()

    if result.recommendations:
        console.print("[bold]Recommendations[/bold]")
        for recommendation in result.recommendations:
            console.print(f"  - {escape(recommendation)}")
        console.print()

    if result.citations:
        console.print(f"[dim]Citations: {escape('; '.join(result.citations))}[/dim]")


if __name__ == "__main__":
    main()
