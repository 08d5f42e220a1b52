# kvcompat/legacy/fanout.py
# SPDX-License-Identifier: Apache-2.0
"""
Batch and scan adapters.

Batch
-----
A batch is one cluster call. Its answers come back positionally aligned
with the keys that were sent, and entry i always describes key i. When the
call itself fails there is no per-key information, so every entry carries
the same normalized error.

Scan
----
Legacy scan callbacks take a trailing `user_data` argument that the cluster
client knows nothing about. `ScanForwarder` closes over it and forwards
each native callback invocation synchronously, in delivery order, without
buffering. With concurrent node scans the cluster client may call it from
several threads at once; any shared state behind the legacy callback is
the caller's to protect.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from kvcompat.cluster.cluster_base import ClusterClientError, Record
from kvcompat.legacy.results import (
    OperationResult,
    ResultCode,
    normalize_error,
    normalize_record,
    result_code_for,
    with_single_value,
)


LegacyScanCallback = Callable[
    [str, Optional[str], bytes, Dict[str, Any], int, int, Any], None
]
"""(namespace, set, digest, values_by_name, generation, expiration, user_data)"""


def match_batch_records(
    records: Sequence[Optional[Record]],
    bin_name: Optional[str] = None,
    *,
    single_bin: bool = False,
) -> List[OperationResult]:
    """Normalize batch records in input order; `single_bin` also fills `single_value`."""
    results = [normalize_record(r) for r in records]
    if single_bin:
        results = [with_single_value(r, bin_name) for r in results]
    return results


def match_batch_exists(flags: Iterable[bool]) -> List[OperationResult]:
    return [
        OperationResult(result_code=ResultCode.OK, values_by_name={})
        if found
        else OperationResult(result_code=ResultCode.KEY_NOT_FOUND)
        for found in flags
    ]


def fill_batch_failure(exc: ClusterClientError, size: int) -> List[OperationResult]:
    """One identical error entry per requested key."""
    failed = normalize_error(exc)
    return [failed] * size


def fill_node_codes(code: ResultCode, node_names: Iterable[str]) -> Dict[str, ResultCode]:
    return {name: code for name in node_names}


def node_codes_for_error(
    exc: ClusterClientError, node_names: Iterable[str]
) -> Dict[str, ResultCode]:
    return fill_node_codes(result_code_for(exc.code), node_names)


class ScanForwarder:
    """Native scan callback bound to a legacy callback and its user data."""

    __slots__ = ("_callback", "_user_data")

    def __init__(self, callback: LegacyScanCallback, user_data: Any = None) -> None:
        self._callback = callback
        self._user_data = user_data

    def __call__(
        self,
        namespace: str,
        set_name: Optional[str],
        digest: bytes,
        bins: Mapping[str, Any],
        generation: int,
        expiration: int,
    ) -> None:
        self._callback(
            namespace,
            set_name,
            digest,
            dict(bins) if bins is not None else {},
            generation,
            expiration,
            self._user_data,
        )


__all__ = [
    "LegacyScanCallback",
    "match_batch_records",
    "match_batch_exists",
    "fill_batch_failure",
    "fill_node_codes",
    "node_codes_for_error",
    "ScanForwarder",
]
