"""Main CLI entry point for clustercheck."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.markup import escape

from clustercheck import __version__
from clustercheck.core.exceptions import ConfigurationError, KubernetesError
from clustercheck.core.models import CheckCategory, ClusterTarget, GateCheckResult
from clustercheck.report.formatter import ReportFormatter
from clustercheck.utils.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from clustercheck.core.config import ClusterCheckConfig
    from clustercheck.interfaces.check import CheckContext
    from clustercheck.interfaces.credential_source import CredentialSource
    from clustercheck.interfaces.kubernetes_provider import KubernetesProvider
    from clustercheck.interfaces.metrics_provider import MetricsProvider

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)

ALL_CATEGORIES = (CheckCategory.PODS, CheckCategory.FLUX, CheckCategory.METRICS)


class ClusterCheckContext:
    """Shared context for CLI commands with lazy initialization."""

    def __init__(
        self,
        config_path: str | None = None,
        namespace: str | None = None,
        fqdn: str | None = None,
        use_secret_store: bool = False,
        debug: bool = False,
        environ: Mapping[str, str] | None = None,
    ):
        """Initialize context from command-line flags.

        Args:
            config_path: Path to configuration file (optional)
            namespace: Namespace filter for pod and Flux checks
            fqdn: Domain suffix for the cluster identifier
            use_secret_store: Resolve Prometheus credentials from the secret store
            debug: Enable debug tracing
            environ: Environment mapping (default: os.environ)
        """
        self.config_path = config_path
        self.namespace = namespace
        self.fqdn = fqdn
        self.use_secret_store = use_secret_store
        self.debug = debug
        self.environ = os.environ if environ is None else environ
        self._config: ClusterCheckConfig | None = None
        self._target: ClusterTarget | None = None
        self._kubernetes_provider: KubernetesProvider | None = None
        self._metrics_provider: MetricsProvider | None = None

    @property
    def config(self) -> ClusterCheckConfig:
        """Get or assemble config lazily (file, then flags, then environment)."""
        if self._config is None:
            from clustercheck.core.config import ClusterCheckConfig

            self._config = (
                ClusterCheckConfig.load(self.config_path)
                .with_cli_overrides(
                    namespace=self.namespace,
                    fqdn=self.fqdn,
                    use_secret_store=self.use_secret_store,
                    debug=self.debug,
                )
                .with_environment(self.environ)
            )
        return self._config

    @property
    def target(self) -> ClusterTarget:
        """Get the resolved cluster identity (cached)."""
        if self._target is None:
            from clustercheck.clients.kubernetes_client import current_context
            from clustercheck.core.identity import resolve_cluster_target

            try:
                context = current_context(self.config.kubernetes.kubeconfig_path)
            except KubernetesError as e:
                logger.debug("cluster_context_unresolved", error=str(e))
                context = None

            self._target = resolve_cluster_target(context, self.config.cluster)
        return self._target

    @property
    def kubernetes_provider(self) -> KubernetesProvider:
        """Get or create Kubernetes adapter lazily."""
        if self._kubernetes_provider is None:
            from clustercheck.adapters.k8s_adapter import KubernetesAdapter

            self._kubernetes_provider = KubernetesAdapter(
                kubeconfig_path=self.config.kubernetes.kubeconfig_path,
                request_timeout=self.config.gate.check_timeout_seconds,
            )
        return self._kubernetes_provider

    @property
    def credential_source(self) -> CredentialSource | None:
        """Build the configured credential source, None if disabled."""
        credentials = self.config.credentials
        if not credentials.use_secret_store:
            return None

        if credentials.provider == "aws-secrets-manager":
            from clustercheck.adapters.credential_sources import AWSSecretsCredentialSource

            return AWSSecretsCredentialSource(
                secret_name=credentials.aws_secret_name,
                region=credentials.aws_region,
            )

        from clustercheck.adapters.credential_sources import BitwardenCredentialSource
        from clustercheck.clients.bitwarden import BitwardenCLI

        return BitwardenCredentialSource(
            item_name=credentials.bitwarden_item,
            cli=BitwardenCLI(
                session=self.environ.get("BW_SESSION"),
                timeout=credentials.timeout_seconds,
            ),
        )

    @property
    def metrics_provider(self) -> MetricsProvider:
        """Get or create Prometheus adapter lazily."""
        if self._metrics_provider is None:
            from clustercheck.adapters.prometheus_adapter import PrometheusAdapter

            self._metrics_provider = PrometheusAdapter.from_config(
                self.config.prometheus,
                credential_source=self.credential_source,
            )
        return self._metrics_provider

    def check_context(self, categories: Iterable[CheckCategory]) -> CheckContext:
        """Build the check context with only the providers the categories need."""
        from clustercheck.interfaces.check import CheckContext

        requested = set(categories)
        needs_kubernetes = bool(requested & {CheckCategory.PODS, CheckCategory.FLUX})

        return CheckContext(
            target=self.target,
            kubernetes_provider=self.kubernetes_provider if needs_kubernetes else None,
            metrics_provider=(
                self.metrics_provider if CheckCategory.METRICS in requested else None
            ),
        )

    async def run(self, categories: Iterable[CheckCategory]) -> GateCheckResult:
        """Run the requested check categories.

        Args:
            categories: Categories to run

        Returns:
            Finalized GateCheckResult
        """
        from clustercheck.checks.check_orchestrator import AUTH_GRACE_SECONDS, CheckOrchestrator
        from clustercheck.checks.check_registry import build_registry

        categories = tuple(categories)
        orchestrator = CheckOrchestrator(
            registry=build_registry(self.config),
            max_concurrent=self.config.gate.max_concurrent,
            check_timeout_seconds=self.config.gate.check_timeout_seconds,
            auth_timeout_seconds=self.config.credentials.timeout_seconds + AUTH_GRACE_SECONDS,
        )
        context = self.check_context(categories)

        try:
            return await orchestrator.run(context, categories)
        finally:
            if context.metrics_provider is not None:
                await context.metrics_provider.close()


def _execute(ctx: click.Context, categories: Iterable[CheckCategory]) -> GateCheckResult:
    """Run categories for the current invocation and return the result."""
    check_ctx: ClusterCheckContext = ctx.obj
    return asyncio.run(check_ctx.run(categories))


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="clustercheck")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to configuration file (default: ~/.clustercheck/config.yaml if present)",
)
@click.option("-n", "--namespace", default=None, help="Namespace to check (default: all)")
@click.option("-f", "--fqdn", default=None, help="Domain suffix appended to the cluster name")
@click.option(
    "--bw",
    "use_secret_store",
    is_flag=True,
    help="Read Prometheus credentials from the secret store",
)
@click.option("--debug", is_flag=True, help="Trace Kubernetes and Prometheus requests")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    namespace: str | None,
    fqdn: str | None,
    use_secret_store: bool,
    debug: bool,
) -> None:
    """Cluster Health Check - score a cluster's health for deployment gating.

    Without a subcommand, runs the Prometheus metric checks.
    """
    check_ctx = ClusterCheckContext(
        config_path=config_path,
        namespace=namespace,
        fqdn=fqdn,
        use_secret_store=use_secret_store,
        debug=debug,
    )

    try:
        config = check_ctx.config
    except ConfigurationError as e:
        err_console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        ctx.exit(2)

    setup_logging(
        level=config.logging.level,
        format=config.logging.format,
        output=config.logging.output,
    )
    logger.debug("configuration_loaded", config_path=config_path, debug=debug)

    ctx.obj = check_ctx

    if ctx.invoked_subcommand is None:
        ctx.invoke(metrics)


@cli.command()
@click.option(
    "--output",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Report format",
)
@click.pass_context
def metrics(ctx: click.Context, output: str) -> None:
    """Run the Prometheus metric checks (display only, always exits 0)."""
    result = _execute(ctx, [CheckCategory.METRICS])
    formatter = ReportFormatter(console)

    if output == "json":
        formatter.render_json(result, ctx.obj.target)
    else:
        formatter.render_metrics(result, ctx.obj.target)


@cli.command()
@click.pass_context
def pods(ctx: click.Context) -> None:
    """Check that all pods are Running or Succeeded."""
    result = _execute(ctx, [CheckCategory.PODS])
    ReportFormatter(console).render_pods(result, ctx.obj.target)

    if result.failed_checks:
        ctx.exit(1)


@cli.command()
@click.pass_context
def flux(ctx: click.Context) -> None:
    """Check that all Flux HelmReleases and Kustomizations are Ready."""
    result = _execute(ctx, [CheckCategory.FLUX])
    ReportFormatter(console).render_flux(result, ctx.obj.target)

    if result.failed_checks:
        ctx.exit(1)


@cli.command()
@click.option(
    "--output",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Report format",
)
@click.pass_context
def gate(ctx: click.Context, output: str) -> None:
    """Run all checks and exit 0 only if the health score reaches 80%."""
    result = _execute(ctx, ALL_CATEGORIES)
    formatter = ReportFormatter(console)

    if output == "json":
        formatter.render_json(result, ctx.obj.target)
    else:
        formatter.render_gate(result, ctx.obj.target)

    if not result.overall_passed:
        logger.debug("gate_failed", health_score=round(result.health_score, 2))
        ctx.exit(1)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
