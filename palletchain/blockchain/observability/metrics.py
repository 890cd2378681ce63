# MIT License
# Copyright (c) 2025 Hashborn

"""
Prometheus Metrics Exporter

Metrics:
- Current system block number
- Executed / rejected blocks
- Extrinsics by pallet and outcome, extrinsics per block
- Total issuance and funded account count
"""

from prometheus_client import Counter, Gauge, Histogram, CollectorRegistry

# Create registry for metrics
metrics_registry = CollectorRegistry()

# ═══════════════════════════════════════════════════════════════════
# BLOCK METRICS
# ═══════════════════════════════════════════════════════════════════

block_number = Gauge(
    'palletchain_block_number',
    'Current system block number',
    registry=metrics_registry
)

blocks_executed_total = Counter(
    'palletchain_blocks_executed_total',
    'Blocks that passed the header check and were executed',
    registry=metrics_registry
)

blocks_rejected_total = Counter(
    'palletchain_blocks_rejected_total',
    'Blocks rejected by the header check',
    registry=metrics_registry
)

# ═══════════════════════════════════════════════════════════════════
# EXTRINSIC METRICS
# ═══════════════════════════════════════════════════════════════════

extrinsics_total = Counter(
    'palletchain_extrinsics_total',
    'Extrinsics processed',
    ['pallet', 'status'],
    registry=metrics_registry
)

extrinsics_per_block = Histogram(
    'palletchain_extrinsics_per_block',
    'Number of extrinsics per executed block',
    buckets=[0, 1, 5, 10, 20, 50, 100],
    registry=metrics_registry
)

# ═══════════════════════════════════════════════════════════════════
# STATE METRICS
# ═══════════════════════════════════════════════════════════════════

total_issuance = Gauge(
    'palletchain_total_issuance',
    'Sum of all account balances',
    registry=metrics_registry
)

accounts_total = Gauge(
    'palletchain_accounts_total',
    'Accounts with a non-zero balance',
    registry=metrics_registry
)


# ═══════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS
# ═══════════════════════════════════════════════════════════════════

def update_block_metrics(receipt):
    """
    Update counters/histograms for one executed block.

    Args:
        receipt: BlockReceipt returned by Runtime.execute_block
    """
    blocks_executed_total.inc()
    extrinsics_per_block.observe(len(receipt.extrinsics))
    for ext in receipt.extrinsics:
        extrinsics_total.labels(pallet=ext.pallet, status=ext.status).inc()


def record_block_rejected():
    blocks_rejected_total.inc()


def update_metrics(runtime):
    """
    Refresh gauges from runtime state. Counters are left alone.

    Args:
        runtime: Runtime instance
    """
    block_number.set(runtime.system.block_number())

    balances = runtime.balances.accounts()
    total_issuance.set(sum(balances.values()))
    accounts_total.set(sum(1 for v in balances.values() if v > 0))
