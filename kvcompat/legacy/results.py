# kvcompat/legacy/results.py
# SPDX-License-Identifier: Apache-2.0
"""
Legacy result model and normalization.

Every facade call ends here. The cluster client either hands back a record
(possibly None) or raises `ClusterClientError`; both are folded into a
`ResultCode` and, for reads, an `OperationResult`.

Shape rules
-----------
- A present record is OK with `values_by_name` set to its bins.
- A record carrying duplicate versions is OK with `values_by_name` left None
  and `duplicate_versions` holding every version.
- A missing record is KEY_NOT_FOUND with every other field at its default.
- An error carries only its code; it never carries values.

Native code mapping
-------------------
`result_code_for` is total: unknown or future native codes map to
SERVER_ERROR instead of failing.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional

from kvcompat.cluster.cluster_base import (
    ClusterClientError,
    NativeResultCode,
    Record,
)


class ResultCode(enum.Enum):
    OK = "ok"
    NOT_SET = "not_set"
    SERVER_ERROR = "server_error"
    TIMEOUT = "timeout"
    CLIENT_ERROR = "client_error"
    KEY_NOT_FOUND = "key_not_found"
    GENERATION_MISMATCH = "generation_mismatch"
    PARAMETER_ERROR = "parameter_error"
    KEY_EXISTS = "key_exists"
    BIN_EXISTS = "bin_exists"
    SERIALIZE_ERROR = "serialize_error"
    CLUSTER_KEY_MISMATCH = "cluster_key_mismatch"
    SERVER_MEM_ERROR = "server_mem_error"
    FEATURE_UNAVAILABLE = "feature_unavailable"
    SERVER_NOT_AVAILABLE = "server_not_available"
    BIN_TYPE_ERROR = "bin_type_error"
    RECORD_TOO_BIG = "record_too_big"
    KEY_BUSY = "key_busy"


@dataclass(frozen=True)
class OperationResult:
    """
    Normalized outcome of one read, batch entry or scan.

    Attributes:
        result_code: Outcome; NOT_SET only on a result no call has filled in
        generation: Record generation, -1 when unknown
        single_value: The requested value on single-bin reads
        values_by_name: Bin name → value
        duplicate_versions: Conflicting versions, each shaped like
            `values_by_name`; when set, `values_by_name` is None
        data_corrupted: Scan-only corruption signal
    """

    result_code: ResultCode = ResultCode.NOT_SET
    generation: int = -1
    single_value: Any = None
    values_by_name: Optional[Dict[str, Any]] = None
    duplicate_versions: Optional[List[Dict[str, Any]]] = None
    data_corrupted: bool = False

    @property
    def ok(self) -> bool:
        return self.result_code is ResultCode.OK


_NATIVE_TO_LEGACY: Mapping[int, ResultCode] = {
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

_DESCRIPTIONS: Mapping[ResultCode, str] = {
    ResultCode.OK: "OK",
    ResultCode.NOT_SET: "result code has not been set",
    ResultCode.SERVER_ERROR: "server error",
    ResultCode.TIMEOUT: "timeout",
    ResultCode.CLIENT_ERROR: "client error",
    ResultCode.KEY_NOT_FOUND: "key not found error",
    ResultCode.GENERATION_MISMATCH: "generation error",
    ResultCode.PARAMETER_ERROR: "parameter error",
    ResultCode.KEY_EXISTS: "key exists error",
    ResultCode.BIN_EXISTS: "bin exists error",
    ResultCode.SERIALIZE_ERROR: "serialize error",
    ResultCode.CLUSTER_KEY_MISMATCH: "cluster key mismatch",
    ResultCode.SERVER_MEM_ERROR: "server memory error",
    ResultCode.FEATURE_UNAVAILABLE: "XDS product not available",
    ResultCode.SERVER_NOT_AVAILABLE: "server not available",
    ResultCode.BIN_TYPE_ERROR: "bin type error",
    ResultCode.RECORD_TOO_BIG: "record too big",
    ResultCode.KEY_BUSY: "key busy",
}


def result_code_for(code: int) -> ResultCode:
    """Map a native code to its legacy code; unknown codes become SERVER_ERROR."""
    try:
        return _NATIVE_TO_LEGACY.get(int(code), ResultCode.SERVER_ERROR)
    except (TypeError, ValueError):
        return ResultCode.SERVER_ERROR


def result_code_to_string(code: ResultCode) -> str:
    return _DESCRIPTIONS.get(code, f"unknown error {code}")


def normalize_record(record: Optional[Record]) -> OperationResult:
    if record is None:
        return OperationResult(result_code=ResultCode.KEY_NOT_FOUND)

    if record.duplicates is not None:
        return OperationResult(
            result_code=ResultCode.OK,
            generation=record.generation,
            duplicate_versions=[dict(d) for d in record.duplicates],
        )

    return OperationResult(
        result_code=ResultCode.OK,
        generation=record.generation,
        values_by_name=dict(record.bins),
    )


def normalize_error(exc: ClusterClientError) -> OperationResult:
    return OperationResult(result_code=result_code_for(exc.code))


def with_single_value(result: OperationResult, bin_name: Optional[str]) -> OperationResult:
    """Copy the requested bin into `single_value` when the result holds values."""
    if result.values_by_name is None:
        return result
    return replace(result, single_value=result.values_by_name.get(bin_name or ""))


__all__ = [
    "ResultCode",
    "OperationResult",
    "result_code_for",
    "result_code_to_string",
    "normalize_record",
    "normalize_error",
    "with_single_value",
]
