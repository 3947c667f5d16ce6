"""Helpers for integration-testing buildpack deployments: random names, source staging, tarball archiving, teardown and output matchers."""

__version__ = "0.1.0"