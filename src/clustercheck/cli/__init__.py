"""Command-line interface for clustercheck."""
