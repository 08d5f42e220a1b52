# kvcompat/legacy/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
Legacy facade - Public API

Option objects, the policy translator, result normalization and the
`LegacyClient` facade.
"""

from kvcompat.legacy.options import (
    RetryMode,
    TransactionOptions,
    GenerationKind,
    GenerationMode,
    WriteOptions,
    ScanPriority,
    ScanOptions,
    BinValue,
)
from kvcompat.legacy.policy_translation import (
    to_policy,
    to_write_policy,
    to_scan_policy,
)
from kvcompat.legacy.keys import (
    AddressError,
    build_ref,
    build_digest_ref,
    build_refs,
)
from kvcompat.legacy.results import (
    ResultCode,
    OperationResult,
    result_code_for,
    result_code_to_string,
    normalize_record,
    normalize_error,
)
from kvcompat.legacy.fanout import LegacyScanCallback, ScanForwarder
from kvcompat.legacy.logging_shim import LogLevel, LogCallback, set_logging, reset_logging, log
from kvcompat.legacy.client import LegacyClient

__all__ = [
    "RetryMode",
    "TransactionOptions",
    "GenerationKind",
    "GenerationMode",
    "WriteOptions",
    "ScanPriority",
    "ScanOptions",
    "BinValue",
    "to_policy",
    "to_write_policy",
    "to_scan_policy",
    "AddressError",
    "build_ref",
    "build_digest_ref",
    "build_refs",
    "ResultCode",
    "OperationResult",
    "result_code_for",
    "result_code_to_string",
    "normalize_record",
    "normalize_error",
    "LegacyScanCallback",
    "ScanForwarder",
    "LogLevel",
    "LogCallback",
    "set_logging",
    "reset_logging",
    "log",
    "LegacyClient",
]
