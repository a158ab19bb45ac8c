"""Example scripts for Collection Sync.

Available examples:

basic_usage.py
    Two-way sync between a list of prices and a list of cents.
    Start here to understand the core workflow.

view_model_projection.py
    One-way projection of domain records into display rows.
    Shows SyncConfig, stats and JSON logging.

mapping_recovery.py
    A mapping function that fails mid-relay, and the rebuild that
    brings the pair back in line.

Run any example:
    python examples/basic_usage.py
    python examples/view_model_projection.py
    python examples/mapping_recovery.py
"""
