# SPDX-License-Identifier: Apache-2.0
"""
Policy translation: timeout/retry arithmetic and generation precedence.
"""

import pytest

from kvcompat.cluster.cluster_base import (
    DEFAULT_MAX_RETRIES,
    Policy,
    RecordExistsAction,
    ScanPriority as ClusterScanPriority,
    WritePolicy,
)
from kvcompat.legacy.options import (
    GenerationKind,
    ScanOptions,
    ScanPriority,
    TransactionOptions,
    WriteOptions,
)
from kvcompat.legacy.policy_translation import (
    MAX_SLEEP_BETWEEN_RETRIES_MS,
    to_policy,
    to_scan_policy,
    to_write_policy,
)


def test_absent_options_use_fixed_defaults():
    policy = to_policy(None)
    assert policy.timeout == 5000
    assert policy.max_retries == 2
    assert policy.sleep_between_retries == 1666


def test_absent_options_write_policy_is_unconditional():
    policy = to_write_policy(None, None)
    assert isinstance(policy, WritePolicy)
    assert policy.timeout == 5000
    assert policy.sleep_between_retries == 1666
    assert policy.record_exists_action is RecordExistsAction.UPDATE
    assert policy.expiration == 0


@pytest.mark.parametrize("timeout", [0, 1, 50, 5000, 60000])
def test_one_shot_never_retries(timeout):
    tx = TransactionOptions(timeout_millis=timeout).set_one_shot()
    policy = to_policy(tx)
    assert policy.timeout == timeout
    assert policy.max_retries == 0
    assert policy.sleep_between_retries == 0


def test_retry_keeps_policy_default_retry_count():
    policy = to_policy(TransactionOptions(timeout_millis=3000))
    assert policy.max_retries == DEFAULT_MAX_RETRIES == Policy().max_retries
    assert policy.timeout == 3000
    assert policy.sleep_between_retries == 3000 // (DEFAULT_MAX_RETRIES + 1)


def test_retry_sleep_is_capped():
    policy = to_policy(TransactionOptions(timeout_millis=60000))
    assert policy.sleep_between_retries == MAX_SLEEP_BETWEEN_RETRIES_MS


def test_default_branch_is_not_capped():
    # 5000 // 3 is below the cap anyway; the default branch must not clamp it
    assert to_policy(None).sleep_between_retries == 1666


def test_retry_with_zero_timeout_has_no_sleep():
    policy = to_policy(TransactionOptions(timeout_millis=0))
    assert policy.timeout == 0
    assert policy.sleep_between_retries == 0


def test_expiration_is_copied():
    policy = to_write_policy(None, WriteOptions(expiration=300))
    assert policy.expiration == 300
    assert policy.record_exists_action is RecordExistsAction.UPDATE


@pytest.mark.parametrize(
    "setter, action",
    [
        ("set_generation", RecordExistsAction.EXPECT_GEN_EQUAL),
        ("set_generation_gt", RecordExistsAction.EXPECT_GEN_GT),
        ("set_generation_dup", RecordExistsAction.DUPLICATE),
    ],
)
def test_generation_setters_map_to_actions(setter, action):
    write = getattr(WriteOptions(), setter)(7)
    policy = to_write_policy(None, write)
    assert policy.record_exists_action is action
    assert policy.generation == 7


@pytest.mark.parametrize("setter", ["set_generation", "set_generation_gt", "set_generation_dup"])
def test_unique_wins_over_any_generation_mode(setter):
    write = getattr(WriteOptions(unique=True), setter)(3)
    policy = to_write_policy(TransactionOptions(), write)
    assert policy.record_exists_action is RecordExistsAction.FAIL


def test_last_generation_setter_wins():
    write = WriteOptions().set_generation(1).set_generation_gt(9)
    assert write.generation_mode.kind is GenerationKind.EXPECT_GREATER_OR_EQUAL
    policy = to_write_policy(None, write)
    assert policy.record_exists_action is RecordExistsAction.EXPECT_GEN_GT
    assert policy.generation == 9


def test_translation_returns_fresh_policies():
    tx = TransactionOptions(timeout_millis=1000)
    first = to_policy(tx)
    tx.set_timeout(2000)
    second = to_policy(tx)
    assert first.timeout == 1000
    assert second.timeout == 2000
    assert first is not second


def test_scan_policy_defaults():
    policy = to_scan_policy()
    assert policy.include_bin_data is True
    assert policy.scan_percent == 100
    assert policy.concurrent_nodes is True
    assert policy.priority is ClusterScanPriority.AUTO
    assert policy.max_retries == DEFAULT_MAX_RETRIES


def test_scan_policy_with_transaction_disables_retries():
    policy = to_scan_policy(TransactionOptions(timeout_millis=9000))
    assert policy.timeout == 9000
    assert policy.max_retries == 0


def test_scan_policy_copies_scan_options():
    scan = ScanOptions(
        concurrent_nodes=False,
        threads_per_node=4,
        priority=ScanPriority.HIGH,
        fail_on_cluster_change=True,
    )
    policy = to_scan_policy(None, scan, no_bin_data=True, scan_percent=25)
    assert policy.concurrent_nodes is False
    assert policy.threads_per_node == 4
    assert policy.priority is ClusterScanPriority.HIGH
    assert policy.fail_on_cluster_change is True
    assert policy.include_bin_data is False
    assert policy.scan_percent == 25
