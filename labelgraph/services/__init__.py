"""Labelgraph services."""
