"""Configuration management for clustercheck."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from clustercheck.core.exceptions import ConfigurationError
from clustercheck.core.models import CheckPolarity, MetricQuerySpec

DEFAULT_CONFIG_PATH = "~/.clustercheck/config.yaml"

# Literal PromQL braces are doubled; {cluster} and {short_cluster} are placeholders.
DEFAULT_QUERIES: tuple[MetricQuerySpec, ...] = (
    MetricQuerySpec(
        description="APISERVER",
        query='avg(up{{job="kube-apiserver",cluster="{cluster}"}})',
    ),
    MetricQuerySpec(
        description="CLUSTER",
        query='capi_cluster_status_phase{{phase="Provisioned", tenantcluster="{short_cluster}"}} == 1',
    ),
    MetricQuerySpec(
        description="FLUENTBITERRORS",
        query='clamp(sum(rate(fluentbit_output_errors_total{{cluster="{cluster}"}}[1h])) > 0,1,1)',
        polarity=CheckPolarity.INVERTED,
    ),
    MetricQuerySpec(
        description="FLUENTDERRORS",
        query='clamp(avg(fluentd_output_status_num_errors{{cluster="{cluster}"}}) > 0,1,1)',
        polarity=CheckPolarity.INVERTED,
    ),
    MetricQuerySpec(
        description="GOLDPINGER",
        query='avg(goldpinger_cluster_health_total{{cluster="{cluster}"}})',
    ),
    MetricQuerySpec(
        description="KUBEDNS",
        query='avg(up{{job="kube-dns", cluster="{cluster}"}})',
    ),
    MetricQuerySpec(
        description="KUBELET",
        query='clamp((count(up{{job="kubelet", cluster="{cluster}"}}) > 3),1,1)',
    ),
    MetricQuerySpec(
        description="NETWORKOPERATOR",
        query='clamp(avg(nwop_netlink_routes_fib{{protocol="bgp",vrf="main",cluster="{cluster}"}}),1,1)',
    ),
    MetricQuerySpec(
        description="NODE",
        query='min(kube_node_status_condition{{condition="Ready",status="true",cluster="{cluster}"}})',
    ),
    MetricQuerySpec(
        description="STORAGECHECK",
        query=(
            'clamp((increase(storage_check_success_total{{cluster="{cluster}"}}[1h]) > 1),1,1)'
            ' OR (storage_check_failure_total{{cluster="{cluster}"}} > 0)'
        ),
    ),
    MetricQuerySpec(
        description="PROMETHEUSAGENT",
        query='avg(up{{job="prometheus-agent",cluster="{cluster}"}})',
    ),
    MetricQuerySpec(
        description="SYSTEMPODS",
        query=(
            'clamp(sum(kube_pod_status_phase{{namespace=~".*-system", '
            'phase!~"Running|Succeeded",cluster="{cluster}"}} == 0),1,1)'
        ),
    ),
)


class PrometheusConfig(BaseModel):
    """Prometheus endpoint configuration."""

    url: str = "https://127.0.0.1:9090"
    username: str | None = None
    password: str | None = None
    # Certificate validation stays off unless explicitly enabled
    verify_tls: bool = False
    timeout_seconds: float = 10.0


class CredentialsConfig(BaseModel):
    """Secret store lookup for Prometheus credentials."""

    use_secret_store: bool = False
    provider: Literal["bitwarden", "aws-secrets-manager"] = "bitwarden"
    bitwarden_item: str = "Prometheus Agent RemoteWrite"
    aws_secret_name: str = "clustercheck/prometheus"
    aws_region: str = "us-east-1"
    # Bound on one secret store lookup (the bw subprocess)
    timeout_seconds: float = Field(30.0, gt=0)


class KubernetesConfig(BaseModel):
    """Kubernetes access configuration."""

    kubeconfig_path: str | None = None
    namespace: str = ""  # empty means all namespaces


class ClusterConfig(BaseModel):
    """Cluster identifier resolution."""

    name_override: str | None = None
    fqdn: str | None = None


class GateConfig(BaseModel):
    """Gate execution configuration."""

    max_concurrent: int = Field(1, ge=1)
    check_timeout_seconds: int = Field(10, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "console"
    output: str = "stderr"


class ClusterCheckConfig(BaseModel):
    """Main clustercheck configuration.

    Assembled once at process start (defaults, YAML file, CLI flags, then
    environment) and passed explicitly to everything that needs it.
    """

    prometheus: PrometheusConfig = Field(default_factory=PrometheusConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    kubernetes: KubernetesConfig = Field(default_factory=KubernetesConfig)
    cluster: ClusterConfig = Field(default_factory=ClusterConfig)
    gate: GateConfig = Field(default_factory=GateConfig)
    queries: list[MetricQuerySpec] = Field(default_factory=lambda: list(DEFAULT_QUERIES))
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: str | Path) -> "ClusterCheckConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            ClusterCheckConfig instance

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        config_path = Path(path).expanduser()

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        try:
            return cls(**(data or {}))
        except Exception as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def load(cls, path: str | Path | None = None) -> "ClusterCheckConfig":
        """Load configuration, falling back to defaults.

        An explicitly given path must exist; the default path is optional.

        Args:
            path: Explicit configuration file path (optional)

        Returns:
            ClusterCheckConfig instance

        Raises:
            ConfigurationError: If an explicit file is missing or invalid
        """
        if path is not None:
            return cls.from_file(path)

        default_path = Path(DEFAULT_CONFIG_PATH).expanduser()
        if default_path.exists():
            return cls.from_file(default_path)

        return cls()

    def with_cli_overrides(
        self,
        namespace: str | None = None,
        fqdn: str | None = None,
        use_secret_store: bool = False,
        debug: bool = False,
    ) -> "ClusterCheckConfig":
        """Apply command-line flags on top of the loaded configuration.

        Args:
            namespace: Namespace filter for pod and Flux probes
            fqdn: Domain suffix appended to the cluster identifier
            use_secret_store: Resolve Prometheus credentials from the secret store
            debug: Enable debug tracing

        Returns:
            New configuration with overrides applied
        """
        config = self.model_copy(deep=True)

        if namespace is not None:
            config.kubernetes.namespace = namespace
        if fqdn:
            config.cluster.fqdn = fqdn
        if use_secret_store:
            config.credentials.use_secret_store = True
        if debug:
            config.logging.level = "DEBUG"

        return config

    def with_environment(self, environ: Mapping[str, str]) -> "ClusterCheckConfig":
        """Apply environment variable overrides.

        Environment values win over flags and file settings. Empty values
        are ignored.

        Args:
            environ: Environment mapping (typically os.environ)

        Returns:
            New configuration with overrides applied
        """
        config = self.model_copy(deep=True)

        if environ.get("PROMETHEUS_URL"):
            config.prometheus.url = environ["PROMETHEUS_URL"]
        if environ.get("PROM_USER"):
            config.prometheus.username = environ["PROM_USER"]
        if environ.get("PROM_PASS"):
            config.prometheus.password = environ["PROM_PASS"]
        if environ.get("CLUSTER"):
            config.cluster.name_override = environ["CLUSTER"]
        if environ.get("CLUSTERCHECK_FQDN"):
            config.cluster.fqdn = environ["CLUSTERCHECK_FQDN"]
        if environ.get("CLUSTERCHECK_BW"):
            config.credentials.use_secret_store = True
        if environ.get("KUBECONFIG"):
            config.kubernetes.kubeconfig_path = environ["KUBECONFIG"]

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation
        """
        return self.model_dump()
