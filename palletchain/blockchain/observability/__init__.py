# MIT License
# Copyright (c) 2025 Hashborn

"""
Observability Module

Prometheus metrics for block execution.
"""

from .metrics import metrics_registry, update_metrics, update_block_metrics, record_block_rejected

__all__ = ['metrics_registry', 'update_metrics', 'update_block_metrics', 'record_block_rejected']
