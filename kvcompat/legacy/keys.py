# kvcompat/legacy/keys.py
# SPDX-License-Identifier: Apache-2.0
"""
Record addressing and bin payload helpers.

A reference is either key-addressed (namespace, set, user key) or
digest-addressed (namespace, digest). Digest references skip hashing
entirely; the caller must only pass digests produced from the same
(namespace, set, key). A foreign digest silently addresses another record.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from kvcompat.cluster.cluster_base import (
    Bin,
    ClusterClientError,
    Key,
    NativeResultCode,
)
from kvcompat.legacy.options import BinValue


class AddressError(ClusterClientError):
    """A required addressing input (namespace, key, digest or key list) is missing."""

    def __init__(self, message: str, **details: Any):
        super().__init__(NativeResultCode.PARAMETER_ERROR, message, details=details)


def build_ref(namespace: Optional[str], set_name: Optional[str], user_key: Any) -> Key:
    if namespace is None:
        raise AddressError("namespace is required")
    if user_key is None:
        raise AddressError("user key is required", namespace=namespace)
    return Key(namespace=namespace, set_name=set_name, user_key=user_key)


def build_digest_ref(namespace: Optional[str], digest: Optional[bytes]) -> Key:
    if namespace is None:
        raise AddressError("namespace is required")
    if digest is None:
        raise AddressError("digest is required", namespace=namespace)
    return Key(namespace=namespace, digest=bytes(digest))


def build_refs(
    namespace: Optional[str],
    set_name: Optional[str],
    keys: Optional[Iterable[Any]],
) -> List[Key]:
    """
    Build one reference per user key, in input order.

    An empty collection yields an empty list; only a missing collection is
    an error.
    """
    if keys is None:
        raise AddressError("key collection is required", namespace=namespace)
    return [build_ref(namespace, set_name, k) for k in keys]


BinsArg = Union[BinValue, Iterable[BinValue], Mapping[str, Any], None]


def to_bins(bins: BinsArg) -> List[Bin]:
    """
    Normalize the accepted bin payload shapes to a list of `Bin`.

    Raises ClusterClientError(PARAMETER_ERROR) when `bins` is None; callers
    invoke this inside their error boundary.
    """
    if bins is None:
        raise ClusterClientError(NativeResultCode.PARAMETER_ERROR, "bins are required")
    if isinstance(bins, BinValue):
        return [Bin(bins.name, bins.value)]
    if isinstance(bins, Mapping):
        return [Bin(name, value) for name, value in bins.items()]
    return [Bin(b.name, b.value) for b in bins]


def to_bin_names(names: Optional[Iterable[str]]) -> Sequence[str]:
    if names is None:
        raise ClusterClientError(
            NativeResultCode.PARAMETER_ERROR, "bin names are required"
        )
    if isinstance(names, str):
        return [names]
    return list(names)


__all__ = [
    "AddressError",
    "build_ref",
    "build_digest_ref",
    "build_refs",
    "to_bins",
    "to_bin_names",
]
