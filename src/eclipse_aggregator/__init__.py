# src/eclipse_aggregator/__init__.py
"""Maven multi-module aggregation for Eclipse configuration generators."""
