# SPDX-License-Identifier: Apache-2.0
"""
Result normalization: native code table, record shapes, descriptions.
"""

import pytest

from kvcompat.cluster.cluster_base import ClusterClientError, NativeResultCode, Record
from kvcompat.legacy.results import (
    OperationResult,
    ResultCode,
    normalize_error,
    normalize_record,
    result_code_for,
    result_code_to_string,
    with_single_value,
)

EXPECTED = {
    NativeResultCode.INVALID_NODE_ERROR: ResultCode.CLIENT_ERROR,
    NativeResultCode.PARSE_ERROR: ResultCode.CLIENT_ERROR,
    NativeResultCode.SERIALIZE_ERROR: ResultCode.SERIALIZE_ERROR,
    NativeResultCode.OK: ResultCode.OK,
    NativeResultCode.SERVER_ERROR: ResultCode.SERVER_ERROR,
    NativeResultCode.KEY_NOT_FOUND_ERROR: ResultCode.KEY_NOT_FOUND,
    NativeResultCode.GENERATION_ERROR: ResultCode.GENERATION_MISMATCH,
    NativeResultCode.PARAMETER_ERROR: ResultCode.PARAMETER_ERROR,
    NativeResultCode.KEY_EXISTS_ERROR: ResultCode.KEY_EXISTS,
    NativeResultCode.BIN_EXISTS_ERROR: ResultCode.BIN_EXISTS,
    NativeResultCode.CLUSTER_KEY_MISMATCH: ResultCode.CLUSTER_KEY_MISMATCH,
    NativeResultCode.SERVER_MEM_ERROR: ResultCode.SERVER_MEM_ERROR,
    NativeResultCode.TIMEOUT: ResultCode.TIMEOUT,
    NativeResultCode.NO_XDS: ResultCode.FEATURE_UNAVAILABLE,
    NativeResultCode.SERVER_NOT_AVAILABLE: ResultCode.SERVER_NOT_AVAILABLE,
    NativeResultCode.BIN_TYPE_ERROR: ResultCode.BIN_TYPE_ERROR,
    NativeResultCode.RECORD_TOO_BIG: ResultCode.RECORD_TOO_BIG,
    NativeResultCode.KEY_BUSY: ResultCode.KEY_BUSY,
}


def test_table_covers_every_native_code():
    assert set(EXPECTED) == set(NativeResultCode)


@pytest.mark.parametrize("native, legacy", sorted(EXPECTED.items()))
def test_native_code_maps_to_documented_result(native, legacy):
    assert result_code_for(native) is legacy
    assert result_code_for(int(native)) is legacy
    assert normalize_error(ClusterClientError(native)).result_code is legacy


@pytest.mark.parametrize("code", [-99, -4, 15, 22, 200, 10_000])
def test_unknown_codes_default_to_server_error(code):
    assert result_code_for(code) is ResultCode.SERVER_ERROR
    # idempotent
    assert result_code_for(code) is result_code_for(code)


def test_error_results_carry_no_values():
    result = normalize_error(ClusterClientError(NativeResultCode.TIMEOUT))
    assert result == OperationResult(result_code=ResultCode.TIMEOUT)
    assert result.values_by_name is None
    assert result.generation == -1


def test_present_record_is_ok_with_bins_and_generation():
    result = normalize_record(Record(bins={"a": 1, "b": "x"}, generation=4))
    assert result.ok
    assert result.values_by_name == {"a": 1, "b": "x"}
    assert result.generation == 4
    assert result.duplicate_versions is None


def test_absent_record_is_key_not_found():
    result = normalize_record(None)
    assert result.result_code is ResultCode.KEY_NOT_FOUND
    assert result.values_by_name is None
    assert result.generation == -1
    assert result.single_value is None


def test_duplicates_replace_values():
    versions = [{"a": 1}, {"a": 2}]
    result = normalize_record(Record(generation=3, duplicates=versions))
    assert result.result_code is ResultCode.OK
    assert result.values_by_name is None
    assert result.duplicate_versions == versions


def test_single_value_is_copied_from_values():
    result = with_single_value(normalize_record(Record(bins={"a": 1})), "a")
    assert result.single_value == 1
    assert result.values_by_name == {"a": 1}


def test_single_value_untouched_without_values():
    missing = normalize_record(None)
    assert with_single_value(missing, "a") is missing


def test_default_result_is_not_set():
    assert OperationResult().result_code is ResultCode.NOT_SET


def test_every_result_code_has_a_description():
    for code in ResultCode:
        assert result_code_to_string(code)
    assert result_code_to_string(ResultCode.OK) == "OK"
    assert result_code_to_string(ResultCode.FEATURE_UNAVAILABLE) == "XDS product not available"
