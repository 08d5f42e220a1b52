# kvcompat/legacy/policy_translation.py
# SPDX-License-Identifier: Apache-2.0
"""
Legacy options → cluster policies.

Pure functions; nothing here raises or touches shared state.

Timeout / retry rules
---------------------
- No `TransactionOptions`: 5000ms timeout, 2 retries, and a sleep of
  5000 // 3 = 1666ms between attempts. No cap is applied.
- ONE_SHOT: the caller's timeout, no retries, no sleep.
- RETRY: the caller's timeout, the cluster policy's *own* default retry
  count, and a sleep of timeout // (retries + 1) capped at 2000ms.

The first branch hard-codes two retries while the RETRY branch reads
`Policy.max_retries`. Both sources are 2 today; they are kept separate so
that callers relying on either behavior keep it if the cluster default moves.

Write existence rules (first match wins)
----------------------------------------
1. `unique` → FAIL
2. EXPECT_EQUAL(g) → EXPECT_GEN_EQUAL
3. EXPECT_GREATER_OR_EQUAL(g) → EXPECT_GEN_GT
4. ON_MISMATCH_KEEP_DUPLICATE(g) → DUPLICATE
5. otherwise → UPDATE
"""

from __future__ import annotations

from typing import Optional, TypeVar

from kvcompat.cluster.cluster_base import (
    Policy,
    RecordExistsAction,
    ScanPolicy,
    ScanPriority as ClusterScanPriority,
    WritePolicy,
)
from kvcompat.legacy.options import (
    DEFAULT_TIMEOUT_MILLIS,
    GenerationKind,
    RetryMode,
    ScanOptions,
    TransactionOptions,
    WriteOptions,
)

DEFAULT_RETRIES = 2
MAX_SLEEP_BETWEEN_RETRIES_MS = 2000
DEFAULT_SCAN_PERCENT = 100

P = TypeVar("P", bound=Policy)

_GENERATION_ACTIONS = {
    GenerationKind.EXPECT_EQUAL: RecordExistsAction.EXPECT_GEN_EQUAL,
    GenerationKind.EXPECT_GREATER_OR_EQUAL: RecordExistsAction.EXPECT_GEN_GT,
    GenerationKind.ON_MISMATCH_KEEP_DUPLICATE: RecordExistsAction.DUPLICATE,
}


def _apply_transaction(policy: P, tx: Optional[TransactionOptions]) -> P:
    if tx is None:
        policy.timeout = DEFAULT_TIMEOUT_MILLIS
        policy.max_retries = DEFAULT_RETRIES
        policy.sleep_between_retries = DEFAULT_TIMEOUT_MILLIS // (DEFAULT_RETRIES + 1)
        return policy

    policy.timeout = tx.timeout_millis
    if tx.retry_mode is RetryMode.ONE_SHOT:
        policy.max_retries = 0
        policy.sleep_between_retries = 0
        return policy

    # max_retries stays at the policy's own default here
    sleep = policy.timeout // (policy.max_retries + 1)
    policy.sleep_between_retries = min(sleep, MAX_SLEEP_BETWEEN_RETRIES_MS)
    return policy


def to_policy(tx: Optional[TransactionOptions] = None) -> Policy:
    """Translate transaction options into a read policy."""
    return _apply_transaction(Policy(), tx)


def to_write_policy(
    tx: Optional[TransactionOptions] = None,
    write: Optional[WriteOptions] = None,
) -> WritePolicy:
    """Translate transaction and write options into a write policy."""
    policy = _apply_transaction(WritePolicy(), tx)
    if write is None:
        return policy

    policy.expiration = write.expiration
    if write.unique:
        policy.record_exists_action = RecordExistsAction.FAIL
        return policy

    mode = write.generation_mode
    action = _GENERATION_ACTIONS.get(mode.kind)
    if action is not None:
        policy.record_exists_action = action
        policy.generation = mode.generation
    return policy


def to_scan_policy(
    tx: Optional[TransactionOptions] = None,
    scan: Optional[ScanOptions] = None,
    no_bin_data: bool = False,
    scan_percent: int = DEFAULT_SCAN_PERCENT,
) -> ScanPolicy:
    """
    Translate scan options into a scan policy.

    Scans are never retried once a timeout is given: a partially delivered
    scan cannot be replayed without repeating records.
    """
    policy = ScanPolicy()
    if tx is not None:
        policy.timeout = tx.timeout_millis
        policy.max_retries = 0

    if scan is not None:
        policy.concurrent_nodes = scan.concurrent_nodes
        policy.threads_per_node = scan.threads_per_node
        policy.fail_on_cluster_change = scan.fail_on_cluster_change
        policy.priority = ClusterScanPriority[scan.priority.name]

    policy.include_bin_data = not no_bin_data
    policy.scan_percent = scan_percent
    return policy


__all__ = [
    "DEFAULT_RETRIES",
    "MAX_SLEEP_BETWEEN_RETRIES_MS",
    "DEFAULT_SCAN_PERCENT",
    "to_policy",
    "to_write_policy",
    "to_scan_policy",
]
