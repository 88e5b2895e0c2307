"""Exceptions for interface implementations."""


class InterfaceError(Exception):
    """Base exception for all interface-related errors."""


class KubernetesProviderError(InterfaceError):
    """Exception for Kubernetes provider operations."""


class MetricsProviderError(InterfaceError):
    """Exception for metrics provider operations."""


class CredentialSourceError(InterfaceError):
    """Exception for credential source lookups."""


class CheckExecutionError(InterfaceError):
    """Exception for health check execution."""
