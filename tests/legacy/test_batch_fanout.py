# SPDX-License-Identifier: Apache-2.0
"""
Batch fan-out: positional matching and uniform failure fill.
"""

from kvcompat.cluster.cluster_base import ClusterClientError, NativeResultCode, Record
from kvcompat.legacy.fanout import (
    fill_batch_failure,
    match_batch_exists,
    match_batch_records,
)
from kvcompat.legacy.results import ResultCode
from tests.conftest import NAMESPACE, SET_NAME


def test_records_are_matched_positionally():
    records = [Record(bins={"v": 1}), None, Record(bins={"v": 3})]
    results = match_batch_records(records)
    assert [r.result_code for r in results] == [
        ResultCode.OK,
        ResultCode.KEY_NOT_FOUND,
        ResultCode.OK,
    ]
    assert results[0].values_by_name == {"v": 1}
    assert results[2].values_by_name == {"v": 3}


def test_single_bin_batches_fill_single_value():
    results = match_batch_records([Record(bins={"v": 9}), None], "v", single_bin=True)
    assert results[0].single_value == 9
    assert results[1].single_value is None


def test_exists_flags():
    results = match_batch_exists([True, False])
    assert results[0].result_code is ResultCode.OK
    assert results[0].values_by_name == {}
    assert results[1].result_code is ResultCode.KEY_NOT_FOUND


def test_failure_fill_repeats_one_error():
    results = fill_batch_failure(ClusterClientError(NativeResultCode.TIMEOUT), 3)
    assert len(results) == 3
    assert all(r.result_code is ResultCode.TIMEOUT for r in results)
    assert all(r.values_by_name is None for r in results)


def test_batch_get_with_one_missing_key(client, cluster):
    for k in ("a", "c", "d"):
        client.set(NAMESPACE, SET_NAME, k, {"name": k.upper()})

    results = client.batch_get_all(NAMESPACE, SET_NAME, ["a", "b", "c", "d"])

    assert len(results) == 4
    assert results[1].result_code is ResultCode.KEY_NOT_FOUND
    for i, k in ((0, "a"), (2, "c"), (3, "d")):
        assert results[i].result_code is ResultCode.OK
        assert results[i].values_by_name == {"name": k.upper()}
    assert [c[0] for c in cluster.calls].count("get_batch") == 1


def test_batch_get_single_bin(client):
    client.set(NAMESPACE, SET_NAME, 1, {"a": 10, "b": 20})
    client.set(NAMESPACE, SET_NAME, 2, {"a": 11})

    results = client.batch_get(NAMESPACE, SET_NAME, [2, 1], "a")

    assert [r.single_value for r in results] == [11, 10]
    assert results[1].values_by_name == {"a": 10}


def test_batch_get_bins_filters(client):
    client.set(NAMESPACE, SET_NAME, "k", {"a": 1, "b": 2, "c": 3})
    (result,) = client.batch_get_bins(NAMESPACE, SET_NAME, ["k"], ["a", "c"])
    assert result.values_by_name == {"a": 1, "c": 3}


def test_batch_call_failure_fills_every_entry(client, cluster):
    cluster.fail_next(NativeResultCode.SERVER_NOT_AVAILABLE)
    results = client.batch_get_all(NAMESPACE, SET_NAME, ["x", "y"])
    assert [r.result_code for r in results] == [ResultCode.SERVER_NOT_AVAILABLE] * 2


def test_batch_exists(client, cluster):
    client.set_bin(NAMESPACE, SET_NAME, "here", "v", 1)
    results = client.batch_exists(NAMESPACE, SET_NAME, ["gone", "here"])
    assert [r.result_code for r in results] == [ResultCode.KEY_NOT_FOUND, ResultCode.OK]

    cluster.fail_next(NativeResultCode.TIMEOUT)
    results = client.batch_exists(NAMESPACE, SET_NAME, ["gone", "here", "x"])
    assert [r.result_code for r in results] == [ResultCode.TIMEOUT] * 3


def test_batch_with_empty_key_list(client):
    assert client.batch_get_all(NAMESPACE, SET_NAME, []) == []
