# SPDX-License-Identifier: Apache-2.0
"""
Record addressing and bin payload helpers.
"""

import pytest

from kvcompat.cluster.cluster_base import Bin, ClusterClientError, NativeResultCode
from kvcompat.legacy.keys import (
    AddressError,
    build_digest_ref,
    build_ref,
    build_refs,
    to_bin_names,
    to_bins,
)
from kvcompat.legacy.options import BinValue


def test_build_ref_is_key_addressed():
    ref = build_ref("test", "demo", 42)
    assert ref.namespace == "test"
    assert ref.set_name == "demo"
    assert ref.user_key == 42
    assert not ref.is_digest


def test_build_digest_ref_carries_no_set():
    digest = bytes(range(20))
    ref = build_digest_ref("test", bytearray(digest))
    assert ref.is_digest
    assert ref.digest == digest
    assert ref.set_name is None


@pytest.mark.parametrize(
    "call",
    [
        lambda: build_ref(None, "demo", 1),
        lambda: build_ref("test", "demo", None),
        lambda: build_digest_ref(None, b"x" * 20),
        lambda: build_digest_ref("test", None),
        lambda: build_refs("test", "demo", None),
    ],
)
def test_missing_address_inputs_raise(call):
    with pytest.raises(AddressError) as excinfo:
        call()
    assert excinfo.value.code == NativeResultCode.PARAMETER_ERROR
    assert isinstance(excinfo.value, ClusterClientError)


def test_build_refs_preserves_order_and_allows_empty():
    refs = build_refs("test", "demo", ["b", "a", "c"])
    assert [r.user_key for r in refs] == ["b", "a", "c"]
    assert build_refs("test", "demo", []) == []


def test_to_bins_accepts_all_payload_shapes():
    assert to_bins(BinValue("a", 1)) == [Bin("a", 1)]
    assert to_bins([BinValue("a", 1), BinValue("b", "x")]) == [Bin("a", 1), Bin("b", "x")]
    assert to_bins({"a": 1, "b": [1, 2]}) == [Bin("a", 1), Bin("b", [1, 2])]


def test_missing_bins_is_a_parameter_error_not_an_address_error():
    with pytest.raises(ClusterClientError) as excinfo:
        to_bins(None)
    assert not isinstance(excinfo.value, AddressError)
    assert excinfo.value.code == NativeResultCode.PARAMETER_ERROR


def test_to_bin_names():
    assert to_bin_names(("a", "b")) == ["a", "b"]
    assert to_bin_names("a") == ["a"]
    with pytest.raises(ClusterClientError):
        to_bin_names(None)


def test_address_error_asdict():
    err = AddressError("namespace is required")
    payload = err.asdict()
    assert payload["error"] == "AddressError"
    assert payload["code"] == NativeResultCode.PARAMETER_ERROR
    assert payload["message"] == "namespace is required"
