"""Terminal and JSON rendering of check results."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

from clustercheck.core.models import (
    CheckCategory,
    CheckOutcome,
    ClusterTarget,
    GateCheckResult,
    HealthBand,
)

BAND_STYLES = {
    HealthBand.EXCELLENT: ("🟢", "bold green"),
    HealthBand.GOOD: ("🟡", "bold green"),
    HealthBand.FAIR: ("🟠", "bold yellow"),
    HealthBand.POOR: ("🔴", "bold red"),
}


class ReportFormatter:
    """Render GateCheckResults for humans (rich) or machines (JSON).

    Colours are presentation only; every line also carries a plain-text
    status word so the report reads the same without a terminal.
    """

    def __init__(self, console: Console | None = None):
        """Initialize formatter.

        Args:
            console: Rich console to write to (default: stdout console)
        """
        self.console = console or Console()

    def render_metrics(self, result: GateCheckResult, target: ClusterTarget) -> None:
        """Render the metric table view, one line per query.

        Args:
            result: Result of a metrics-only run
            target: Cluster the queries ran against
        """
        self.console.print(f"[cyan]clustercheck[/cyan] on {escape(target.name)}")

        for outcome in result.check_results:
            name = escape(outcome.name)
            if outcome.raw_value is None:
                self.console.print(f"{name} [red]ERROR[/red] - {escape(outcome.message)}")
            elif outcome.passed:
                self.console.print(f"{name} [green]🟢 OK (1)[/green]")
            else:
                self.console.print(f"{name} [red]🔴 FAIL (0)[/red]")

    def render_pods(self, result: GateCheckResult, target: ClusterTarget) -> None:
        """Render the pod listing view.

        Args:
            result: Result of a pods-only run
            target: Cluster the pods were listed from
        """
        self.console.print(f"[cyan]podcheck[/cyan] on {escape(target.context)}")
        for outcome in result.outcomes_for(CheckCategory.PODS):
            self._render_pod_outcome(outcome)

    def render_flux(self, result: GateCheckResult, target: ClusterTarget) -> None:
        """Render the Flux resources view.

        Args:
            result: Result of a Flux-only run
            target: Cluster the resources were listed from
        """
        self.console.print(f"[cyan]fluxcheck[/cyan] on {escape(target.context)}")
        for outcome in result.outcomes_for(CheckCategory.FLUX):
            self._render_flux_outcome(outcome)

    def render_gate(self, result: GateCheckResult, target: ClusterTarget) -> None:
        """Render the full gate report.

        Args:
            result: Result of a full gate run
            target: Cluster under test
        """
        self.console.print(
            Panel(f"CLUSTER GATE CHECK - {escape(target.context)}", style="cyan", expand=False)
        )

        self._section("[1/3] Pod Health Check")
        for outcome in result.outcomes_for(CheckCategory.PODS):
            self._render_pod_outcome(outcome)

        self._section("[2/3] Flux Resources Check")
        for outcome in result.outcomes_for(CheckCategory.FLUX):
            self._render_flux_outcome(outcome)

        self._section("[3/3] Prometheus Monitoring Check")
        monitoring = result.outcomes_for(CheckCategory.AUTH) + result.outcomes_for(
            CheckCategory.METRICS
        )
        for outcome in monitoring:
            self._render_metric_line(outcome)
        if all(o.passed for o in monitoring):
            self.console.print("\n[green]✓ All Prometheus checks passed[/green]")
        else:
            self.console.print("\n[red]✗ Some Prometheus checks failed[/red]")

        self.render_summary(result)

    def render_summary(self, result: GateCheckResult) -> None:
        """Render score, per-check table and gate decision.

        Args:
            result: Finalized gate result
        """
        self.console.print()
        self.console.print(Panel("GATE CHECK SUMMARY", style="cyan", expand=False))

        if result.overall_passed:
            self.console.print("[bold green]✓ CLUSTER HEALTH: PASSED[/bold green]")
        else:
            self.console.print("[bold red]✗ CLUSTER HEALTH: FAILED[/bold red]")

        self.console.print(
            f"\n[bold]Health Score: {result.health_score:.1f}% "
            f"({result.passed_checks} of {result.total_checks} checks passed)[/bold]\n"
        )

        table = Table(title="Detailed Results:", title_justify="left")
        table.add_column("Check", style="bold")
        table.add_column("Result")
        table.add_column("Message")

        for outcome in result.check_results:
            if outcome.passed:
                table.add_row(escape(outcome.name), "[green]✓ PASS[/green]", "")
            else:
                table.add_row(escape(outcome.name), "[red]✗ FAIL[/red]", escape(outcome.message))

        self.console.print(table)

        band = result.band
        icon, style = BAND_STYLES[band]
        self.console.print("\nQuality Gate Decision:")
        self.console.print(f"[{style}]{icon} {band.value} - {band.verdict}[/{style}]")

    def to_dict(self, result: GateCheckResult, target: ClusterTarget) -> dict[str, Any]:
        """Build the JSON report document.

        Args:
            result: Finalized gate result
            target: Cluster under test

        Returns:
            JSON-serializable dictionary
        """
        data = result.to_report_dict()
        data["cluster"] = target.name
        data["context"] = target.context
        return data

    def render_json(self, result: GateCheckResult, target: ClusterTarget) -> None:
        """Write the JSON report without markup or wrapping.

        Args:
            result: Finalized gate result
            target: Cluster under test
        """
        self.console.out(json.dumps(self.to_dict(result, target), indent=2), highlight=False)

    def _section(self, title: str) -> None:
        self.console.print()
        self.console.print(f"[bold]{escape(title)}[/bold]")
        self.console.print(Rule(style="dim"))

    def _render_metric_line(self, outcome: CheckOutcome) -> None:
        name = escape(outcome.name)
        if outcome.passed:
            self.console.print(f"  {name} [green]✓ OK[/green]")
        elif outcome.raw_value is None:
            self.console.print(f"  {name} [red]✗ ERROR[/red] - {escape(outcome.message)}")
        else:
            self.console.print(f"  {name} [red]✗ FAIL[/red] - Value: {escape(outcome.raw_value)}")

    def _render_pod_outcome(self, outcome: CheckOutcome) -> None:
        if not outcome.details and not outcome.passed:
            self.console.print(f"[red]Error: {escape(outcome.message)}[/red]")
            return

        for pod in outcome.details:
            if pod.healthy:
                self.console.print(f"{escape(pod.qualified_name)} [green]🟢 {pod.status}[/green]")
            else:
                self.console.print(f"{escape(pod.qualified_name)} [red]🔴 {pod.status}[/red]")

        healthy = sum(1 for pod in outcome.details if pod.healthy)
        self.console.print(
            f"\nSummary: {healthy}/{len(outcome.details)} pods in Running or Succeeded state"
        )

        failed = [pod for pod in outcome.details if not pod.healthy]
        if failed:
            self.console.print("[red]Failed pods:[/red]")
            for pod in failed:
                self.console.print(f"  - {escape(pod.qualified_name)} ({pod.status})")

    def _render_flux_outcome(self, outcome: CheckOutcome) -> None:
        if not outcome.details:
            if outcome.passed:
                self.console.print(f"[yellow]{escape(outcome.message)}[/yellow]")
            else:
                self.console.print(f"[red]Error: {escape(outcome.message)}[/red]")
            return

        for kind, heading in (("HelmRelease", "HelmReleases"), ("Kustomization", "Kustomizations")):
            self.console.print(f"\n[bold]{heading}:[/bold]")
            for resource in outcome.details:
                if resource.kind != kind:
                    continue
                name = escape(resource.qualified_name)
                if resource.healthy:
                    self.console.print(
                        f"{name} [green]🟢 Ready[/green] (revision: {escape(resource.revision)})"
                    )
                elif resource.status == "Unknown":
                    self.console.print(
                        f"{name} [yellow]⚠️  Unknown[/yellow] - {escape(resource.message)}"
                    )
                else:
                    self.console.print(
                        f"{name} [red]🔴 Not Ready[/red] - {escape(resource.message)}"
                    )

        ready = sum(1 for resource in outcome.details if resource.healthy)
        self.console.print(
            f"\n[bold]Summary:[/bold] {ready}/{len(outcome.details)} resources Ready"
        )

        failed = [resource for resource in outcome.details if not resource.healthy]
        if failed:
            self.console.print("\n[red]Failed resources:[/red]")
            for resource in failed:
                self.console.print(
                    f"  - {resource.kind} {escape(resource.qualified_name)}: "
                    f"{escape(resource.message)}"
                )
