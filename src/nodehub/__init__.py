"""nodehub - node registry and status reconciliation for a multi-node hosting panel."""

__version__ = "0.1.0"
