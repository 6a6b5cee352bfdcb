"""Resolve release versions into image tags and chart versions, and publish
a container image and its Helm charts to an OCI registry."""

__version__ = "0.1.0"
