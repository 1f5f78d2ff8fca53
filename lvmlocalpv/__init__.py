"""Models, builders and a Kubernetes client for LVM local persistent volumes."""

__version__ = "0.1.0"