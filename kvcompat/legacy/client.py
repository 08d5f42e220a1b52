# kvcompat/legacy/client.py
# SPDX-License-Identifier: Apache-2.0
"""
Legacy client facade.

`LegacyClient` re-exposes the older request surface on top of any
`ClusterClient`:

- writes (`set`, `append`, `prepend`, `add`) in five addressing forms each
- `add_and_get`, `delete`, reads, existence checks
- batch reads / existence checks with positionally matched results
- blocking, callback-driven scans
- `operate` for a combined write + read round trip

Error model
-----------
Cluster errors never escape. Every call catches `ClusterClientError`,
attaches the operation and namespace to it, logs it at DEBUG and returns a
normalized `ResultCode` / `OperationResult`. A missing record is
KEY_NOT_FOUND, not an error.

The only exception raised to callers is `AddressError`, for a missing
namespace, user key, digest or key collection. It is raised while building
the record reference, before the cluster client is called. Missing bins or
bin names are reported as PARAMETER_ERROR results instead.

Addressing forms
----------------
For each write operation `<op>`:

    <op>_value(key, value)                             default namespace, single bin
    <op>_bin(ns, set_name, key, bin_name, value)       one named bin
    <op>(ns, set_name, key, bins)                      BinValue(s) or a name→value mapping
    <op>_digest(ns, digest, bins)
    <op>_digest_bin(ns, digest, bin_name, value)

Every form also takes optional `tx` (TransactionOptions) and `write`
(WriteOptions); omitted options select the translator's defaults.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from kvcompat.cluster.cluster_base import (
    ClusterClient,
    ClusterClientError,
    Key,
    Operation,
)
from kvcompat.config import DEFAULT_NAMESPACE, DEFAULT_PORT, LegacyClientConfig
from kvcompat.core.error_context import attach_context, get_context
from kvcompat.legacy.fanout import (
    LegacyScanCallback,
    ScanForwarder,
    fill_batch_failure,
    fill_node_codes,
    match_batch_exists,
    match_batch_records,
    node_codes_for_error,
)
from kvcompat.legacy.keys import (
    BinsArg,
    build_digest_ref,
    build_ref,
    build_refs,
    to_bin_names,
    to_bins,
)
from kvcompat.legacy.logging_shim import set_logging
from kvcompat.legacy.options import (
    BinValue,
    ScanOptions,
    TransactionOptions,
    WriteOptions,
)
from kvcompat.legacy.policy_translation import (
    DEFAULT_SCAN_PERCENT,
    to_policy,
    to_scan_policy,
    to_write_policy,
)
from kvcompat.legacy.results import (
    OperationResult,
    ResultCode,
    normalize_error,
    normalize_record,
    with_single_value,
)

LOG = logging.getLogger(__name__)

_COMPONENT = "legacy_client"
_SINGLE_BIN = ""

# legacy write name -> ClusterClient method
_WRITE_METHODS = {
    "set": "put",
    "append": "append",
    "prepend": "prepend",
    "add": "add",
}


class LegacyClient:
    """
    Legacy request surface over a `ClusterClient`.

    Calls are synchronous: each one blocks until the cluster client returns,
    and issues at most one cluster call. Retries, if any, are performed by
    the cluster client according to the translated policy.
    """

    def __init__(
        self,
        cluster: ClusterClient,
        host: Optional[str] = None,
        port: int = DEFAULT_PORT,
        *,
        default_namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        self._cluster = cluster
        self._default_namespace = default_namespace
        if host is not None:
            # failures leave the client unconnected instead of raising
            self.add_host(host, port)

    @classmethod
    def from_config(
        cls,
        cluster: ClusterClient,
        config: Optional[LegacyClientConfig] = None,
    ) -> "LegacyClient":
        """
        Build a client from `config` (or `LegacyClientConfig.from_env()`).

        Applies the configured log level, then registers every seed host.
        """
        cfg = config if config is not None else LegacyClientConfig.from_env()
        cfg.validate()
        set_logging(cfg.log_level)

        client = cls(cluster, default_namespace=cfg.default_namespace)
        for host, port in cfg.hosts:
            client.add_host(host, port)
        return client

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _fail(
        self,
        exc: ClusterClientError,
        operation: str,
        namespace: Optional[str],
        **context: Any,
    ) -> OperationResult:
        attach_context(exc, _COMPONENT, operation=operation, namespace=namespace, **context)
        LOG.debug(
            "%s failed: code=%s %s",
            operation,
            exc.code,
            exc.message,
            extra=dict(get_context(exc)),
        )
        return normalize_error(exc)

    def _default_ref(self, key: Any) -> Key:
        return build_ref(self._default_namespace, None, key)

    def _write(
        self,
        operation: str,
        ref: Key,
        bins: BinsArg,
        tx: Optional[TransactionOptions],
        write: Optional[WriteOptions],
    ) -> ResultCode:
        method = getattr(self._cluster, _WRITE_METHODS[operation])
        try:
            method(to_write_policy(tx, write), ref, to_bins(bins))
            return ResultCode.OK
        except ClusterClientError as exc:
            return self._fail(exc, operation, ref.namespace).result_code

    def _read(
        self,
        operation: str,
        ref: Key,
        bin_names: Optional[Iterable[str]],
        tx: Optional[TransactionOptions],
        *,
        all_bins: bool = False,
    ) -> OperationResult:
        try:
            names = None if all_bins else to_bin_names(bin_names)
            record = self._cluster.get(to_policy(tx), ref, names)
            return normalize_record(record)
        except ClusterClientError as exc:
            return self._fail(exc, operation, ref.namespace)

    def _operate(
        self,
        operation: str,
        ref: Key,
        operations: Sequence[Operation],
        tx: Optional[TransactionOptions],
        write: Optional[WriteOptions],
    ) -> OperationResult:
        try:
            record = self._cluster.operate(to_write_policy(tx, write), ref, operations)
            return normalize_record(record)
        except ClusterClientError as exc:
            return self._fail(exc, operation, ref.namespace)

    def _delete(
        self,
        ref: Key,
        tx: Optional[TransactionOptions],
        write: Optional[WriteOptions],
    ) -> ResultCode:
        try:
            if self._cluster.delete(to_write_policy(tx, write), ref):
                return ResultCode.OK
            return ResultCode.KEY_NOT_FOUND
        except ClusterClientError as exc:
            return self._fail(exc, "delete", ref.namespace).result_code

    def _batch_get(
        self,
        operation: str,
        namespace: Optional[str],
        set_name: Optional[str],
        keys: Optional[Iterable[Any]],
        bin_names: Optional[Iterable[str]],
        tx: Optional[TransactionOptions],
        *,
        all_bins: bool = False,
        single_bin: Optional[str] = None,
    ) -> List[OperationResult]:
        refs = build_refs(namespace, set_name, keys)
        try:
            names = None if all_bins else to_bin_names(bin_names)
            records = self._cluster.get_batch(to_policy(tx), refs, names)
            return match_batch_records(
                records, single_bin, single_bin=single_bin is not None
            )
        except ClusterClientError as exc:
            self._fail(exc, operation, namespace, batch_size=len(refs))
            return fill_batch_failure(exc, len(refs))

    # ------------------------------------------------------------------ #
    # Connection
    # ------------------------------------------------------------------ #

    def add_host(self, hostname: str, port: int = DEFAULT_PORT) -> ResultCode:
        try:
            self._cluster.add_host(hostname, port)
            return ResultCode.OK
        except ClusterClientError as exc:
            attach_context(exc, _COMPONENT, operation="add_host", host=hostname, port=port)
            LOG.warning(
                "could not add host %s:%s: %s",
                hostname,
                port,
                exc.message,
                extra=dict(get_context(exc)),
            )
            return normalize_error(exc).result_code

    def is_connected(self) -> bool:
        return self._cluster.is_connected()

    def get_node_names(self) -> List[str]:
        """Names of the cluster's active nodes; empty if they cannot be listed."""
        try:
            return list(self._cluster.get_node_names())
        except ClusterClientError as exc:
            self._fail(exc, "get_node_names", None)
            return []

    @property
    def default_namespace(self) -> str:
        return self._default_namespace

    def set_default_namespace(self, namespace: str) -> None:
        self._default_namespace = namespace

    def close(self) -> None:
        self._cluster.close()

    def compute_digest(self, set_name: Optional[str], key: Any) -> Optional[bytes]:
        """Digest for (set_name, key) without a network call; None on failure."""
        try:
            return self._cluster.compute_digest(set_name, key)
        except ClusterClientError as exc:
            self._fail(exc, "compute_digest", None, set_name=set_name)
            return None

    # ------------------------------------------------------------------ #
    # Writes: set
    # ------------------------------------------------------------------ #

    def set_value(
        self,
        key: Any,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        """Write `value` to the single bin of `key` in the default namespace."""
        return self._write("set", self._default_ref(key), BinValue(_SINGLE_BIN, value), tx, write)

    def set_bin(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bin_name: str,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        ref = build_ref(namespace, set_name, key)
        return self._write("set", ref, BinValue(bin_name, value), tx, write)

    def set(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        """Write bins given as `BinValue`, an iterable of them, or a name→value mapping."""
        return self._write("set", build_ref(namespace, set_name, key), bins, tx, write)

    def set_digest(
        self,
        namespace: str,
        digest: bytes,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("set", build_digest_ref(namespace, digest), bins, tx, write)

    def set_digest_bin(
        self,
        namespace: str,
        digest: bytes,
        bin_name: str,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        ref = build_digest_ref(namespace, digest)
        return self._write("set", ref, BinValue(bin_name, value), tx, write)

    # ------------------------------------------------------------------ #
    # Writes: append / prepend
    # ------------------------------------------------------------------ #

    def append_value(
        self,
        key: Any,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("append", self._default_ref(key), BinValue(_SINGLE_BIN, value), tx, write)

    def append_bin(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bin_name: str,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        ref = build_ref(namespace, set_name, key)
        return self._write("append", ref, BinValue(bin_name, value), tx, write)

    def append(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("append", build_ref(namespace, set_name, key), bins, tx, write)

    def append_digest(
        self,
        namespace: str,
        digest: bytes,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("append", build_digest_ref(namespace, digest), bins, tx, write)

    def append_digest_bin(
        self,
        namespace: str,
        digest: bytes,
        bin_name: str,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        ref = build_digest_ref(namespace, digest)
        return self._write("append", ref, BinValue(bin_name, value), tx, write)

    def prepend_value(
        self,
        key: Any,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("prepend", self._default_ref(key), BinValue(_SINGLE_BIN, value), tx, write)

    def prepend_bin(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bin_name: str,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        ref = build_ref(namespace, set_name, key)
        return self._write("prepend", ref, BinValue(bin_name, value), tx, write)

    def prepend(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("prepend", build_ref(namespace, set_name, key), bins, tx, write)

    def prepend_digest(
        self,
        namespace: str,
        digest: bytes,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("prepend", build_digest_ref(namespace, digest), bins, tx, write)

    def prepend_digest_bin(
        self,
        namespace: str,
        digest: bytes,
        bin_name: str,
        value: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        ref = build_digest_ref(namespace, digest)
        return self._write("prepend", ref, BinValue(bin_name, value), tx, write)

    # ------------------------------------------------------------------ #
    # Writes: add
    # ------------------------------------------------------------------ #

    def add_value(
        self,
        key: Any,
        value: int,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("add", self._default_ref(key), BinValue(_SINGLE_BIN, value), tx, write)

    def add_bin(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bin_name: str,
        value: int,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        ref = build_ref(namespace, set_name, key)
        return self._write("add", ref, BinValue(bin_name, value), tx, write)

    def add(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("add", build_ref(namespace, set_name, key), bins, tx, write)

    def add_digest(
        self,
        namespace: str,
        digest: bytes,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._write("add", build_digest_ref(namespace, digest), bins, tx, write)

    def add_digest_bin(
        self,
        namespace: str,
        digest: bytes,
        bin_name: str,
        value: int,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        ref = build_digest_ref(namespace, digest)
        return self._write("add", ref, BinValue(bin_name, value), tx, write)

    def add_and_get(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> OperationResult:
        """Add to each bin, then read the whole record back in the same round trip."""
        ref = build_ref(namespace, set_name, key)
        try:
            operations = [Operation.add(b) for b in to_bins(bins)]
        except ClusterClientError as exc:
            return self._fail(exc, "add_and_get", namespace)
        operations.append(Operation.get())
        return self._operate("add_and_get", ref, operations, tx, write)

    # ------------------------------------------------------------------ #
    # Deletes
    # ------------------------------------------------------------------ #

    def delete_value(
        self,
        key: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._delete(self._default_ref(key), tx, write)

    def delete(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        """Delete the record; KEY_NOT_FOUND when there was nothing to delete."""
        return self._delete(build_ref(namespace, set_name, key), tx, write)

    def delete_digest(
        self,
        namespace: str,
        digest: bytes,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> ResultCode:
        return self._delete(build_digest_ref(namespace, digest), tx, write)

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get_value(self, key: Any, tx: Optional[TransactionOptions] = None) -> Any:
        """
        Single-bin value of `key` in the default namespace.

        Returns None when the record is missing or the read fails; use
        `get` when the distinction matters.
        """
        result = self._read("get_value", self._default_ref(key), [_SINGLE_BIN], tx)
        return with_single_value(result, _SINGLE_BIN).single_value

    def get(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bin_name: Optional[str],
        tx: Optional[TransactionOptions] = None,
    ) -> OperationResult:
        """Read one bin; the value is in both `values_by_name` and `single_value`."""
        name = bin_name or _SINGLE_BIN
        result = self._read("get", build_ref(namespace, set_name, key), [name], tx)
        return with_single_value(result, name)

    def get_bins(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bin_names: Iterable[str],
        tx: Optional[TransactionOptions] = None,
    ) -> OperationResult:
        return self._read("get_bins", build_ref(namespace, set_name, key), bin_names, tx)

    def get_all(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        tx: Optional[TransactionOptions] = None,
    ) -> OperationResult:
        ref = build_ref(namespace, set_name, key)
        return self._read("get_all", ref, None, tx, all_bins=True)

    def get_with_touch(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        bin_names: Iterable[str],
        expiration: int,
        tx: Optional[TransactionOptions] = None,
    ) -> OperationResult:
        """
        Read `bin_names` and reset the record's expiration to `expiration`.

        The touch is a write, so a successful call increments the generation.
        """
        ref = build_ref(namespace, set_name, key)
        try:
            operations = [Operation.get(name) for name in to_bin_names(bin_names)]
        except ClusterClientError as exc:
            return self._fail(exc, "get_with_touch", namespace)
        operations.append(Operation.touch())
        return self._operate(
            "get_with_touch", ref, operations, tx, WriteOptions(expiration=expiration)
        )

    def get_digest(
        self,
        namespace: str,
        digest: bytes,
        bin_name: Optional[str],
        tx: Optional[TransactionOptions] = None,
    ) -> OperationResult:
        name = bin_name or _SINGLE_BIN
        result = self._read("get_digest", build_digest_ref(namespace, digest), [name], tx)
        return with_single_value(result, name)

    def get_digest_bins(
        self,
        namespace: str,
        digest: bytes,
        bin_names: Iterable[str],
        tx: Optional[TransactionOptions] = None,
    ) -> OperationResult:
        ref = build_digest_ref(namespace, digest)
        return self._read("get_digest_bins", ref, bin_names, tx)

    def get_all_digest(
        self,
        namespace: str,
        digest: bytes,
        tx: Optional[TransactionOptions] = None,
    ) -> OperationResult:
        ref = build_digest_ref(namespace, digest)
        return self._read("get_all_digest", ref, None, tx, all_bins=True)

    # ------------------------------------------------------------------ #
    # Existence
    # ------------------------------------------------------------------ #

    def _exists(self, ref: Key, tx: Optional[TransactionOptions]) -> ResultCode:
        try:
            if self._cluster.exists(to_policy(tx), ref):
                return ResultCode.OK
            return ResultCode.KEY_NOT_FOUND
        except ClusterClientError as exc:
            return self._fail(exc, "exists", ref.namespace).result_code

    def exists_value(self, key: Any, tx: Optional[TransactionOptions] = None) -> ResultCode:
        return self._exists(self._default_ref(key), tx)

    def exists(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        tx: Optional[TransactionOptions] = None,
    ) -> ResultCode:
        return self._exists(build_ref(namespace, set_name, key), tx)

    def batch_exists(
        self,
        namespace: str,
        set_name: Optional[str],
        keys: Iterable[Any],
        tx: Optional[TransactionOptions] = None,
    ) -> List[OperationResult]:
        """One OK / KEY_NOT_FOUND entry per key, in input order."""
        refs = build_refs(namespace, set_name, keys)
        try:
            return match_batch_exists(self._cluster.exists_batch(to_policy(tx), refs))
        except ClusterClientError as exc:
            self._fail(exc, "batch_exists", namespace, batch_size=len(refs))
            return fill_batch_failure(exc, len(refs))

    # ------------------------------------------------------------------ #
    # Batch reads
    # ------------------------------------------------------------------ #

    def batch_get(
        self,
        namespace: str,
        set_name: Optional[str],
        keys: Iterable[Any],
        bin_name: Optional[str],
        tx: Optional[TransactionOptions] = None,
    ) -> List[OperationResult]:
        """Read one bin from each key; entries also carry `single_value`."""
        name = bin_name or _SINGLE_BIN
        return self._batch_get("batch_get", namespace, set_name, keys, [name], tx, single_bin=name)

    def batch_get_bins(
        self,
        namespace: str,
        set_name: Optional[str],
        keys: Iterable[Any],
        bin_names: Iterable[str],
        tx: Optional[TransactionOptions] = None,
    ) -> List[OperationResult]:
        return self._batch_get("batch_get_bins", namespace, set_name, keys, bin_names, tx)

    def batch_get_all(
        self,
        namespace: str,
        set_name: Optional[str],
        keys: Iterable[Any],
        tx: Optional[TransactionOptions] = None,
    ) -> List[OperationResult]:
        return self._batch_get(
            "batch_get_all", namespace, set_name, keys, None, tx, all_bins=True
        )

    # ------------------------------------------------------------------ #
    # Scans
    # ------------------------------------------------------------------ #

    def scan(
        self,
        namespace: str,
        set_name: Optional[str],
        callback: LegacyScanCallback,
        user_data: Any = None,
        *,
        no_bin_data: bool = False,
        scan_percent: int = DEFAULT_SCAN_PERCENT,
        tx: Optional[TransactionOptions] = None,
        scan: Optional[ScanOptions] = None,
    ) -> OperationResult:
        """
        Scan every node for records in `namespace` / `set_name`.

        Blocks until the scan completes; `callback` runs within this call,
        possibly on several cluster client threads at once.
        """
        policy = to_scan_policy(tx, scan, no_bin_data, scan_percent)
        try:
            self._cluster.scan_all(
                policy, namespace, set_name, ScanForwarder(callback, user_data)
            )
            return OperationResult(result_code=ResultCode.OK)
        except ClusterClientError as exc:
            return self._fail(exc, "scan", namespace, set_name=set_name)

    def scan_node(
        self,
        node_name: str,
        namespace: str,
        set_name: Optional[str],
        callback: LegacyScanCallback,
        user_data: Any = None,
        *,
        no_bin_data: bool = False,
        scan_percent: int = DEFAULT_SCAN_PERCENT,
        tx: Optional[TransactionOptions] = None,
        scan: Optional[ScanOptions] = None,
    ) -> ResultCode:
        policy = to_scan_policy(tx, scan, no_bin_data, scan_percent)
        try:
            self._cluster.scan_node(
                policy, node_name, namespace, set_name, ScanForwarder(callback, user_data)
            )
            return ResultCode.OK
        except ClusterClientError as exc:
            return self._fail(
                exc, "scan_node", namespace, set_name=set_name, node_name=node_name
            ).result_code

    def scan_all_nodes(
        self,
        namespace: str,
        set_name: Optional[str],
        callback: LegacyScanCallback,
        user_data: Any = None,
        *,
        no_bin_data: bool = False,
        scan_percent: int = DEFAULT_SCAN_PERCENT,
        tx: Optional[TransactionOptions] = None,
        scan: Optional[ScanOptions] = None,
    ) -> Dict[str, ResultCode]:
        """
        Scan all nodes and report a code per node name.

        The scan is a single cluster call, so every node listed before the
        scan gets the same code.
        """
        node_names = self.get_node_names()
        policy = to_scan_policy(tx, scan, no_bin_data, scan_percent)
        try:
            self._cluster.scan_all(
                policy, namespace, set_name, ScanForwarder(callback, user_data)
            )
            return fill_node_codes(ResultCode.OK, node_names)
        except ClusterClientError as exc:
            self._fail(exc, "scan_all_nodes", namespace, set_name=set_name)
            return node_codes_for_error(exc, node_names)

    # ------------------------------------------------------------------ #
    # Low-level
    # ------------------------------------------------------------------ #

    def operate(
        self,
        namespace: str,
        set_name: Optional[str],
        key: Any,
        read_bin_names: Iterable[str],
        write_bins: BinsArg,
        tx: Optional[TransactionOptions] = None,
        write: Optional[WriteOptions] = None,
    ) -> OperationResult:
        """Write `write_bins`, then read `read_bin_names`, in one round trip."""
        ref = build_ref(namespace, set_name, key)
        try:
            operations = [Operation.put(b) for b in to_bins(write_bins)]
            operations.extend(Operation.get(name) for name in to_bin_names(read_bin_names))
        except ClusterClientError as exc:
            return self._fail(exc, "operate", namespace)
        return self._operate("operate", ref, operations, tx, write)


__all__ = ["LegacyClient"]
