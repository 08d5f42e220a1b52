# kvcompat/__init__.py
# SPDX-License-Identifier: Apache-2.0

"""
kvcompat - legacy key-value client facade

Re-exposes the older request surface (single timeout/retry knob, flat bin
name/value pairs, digest addressing) over a modern cluster client.

    from kvcompat import LegacyClient, TransactionOptions
    from kvcompat.cluster.aerospike_adapter import AerospikeClusterClient

    client = LegacyClient(AerospikeClusterClient(), "127.0.0.1", 3000)
    rc = client.set_bin("test", "demo", "user-1", "name", "ada")
"""

from kvcompat.legacy import (
    RetryMode,
    TransactionOptions,
    GenerationMode,
    WriteOptions,
    ScanPriority,
    ScanOptions,
    BinValue,
    AddressError,
    ResultCode,
    OperationResult,
    result_code_to_string,
    LogLevel,
    set_logging,
    reset_logging,
    log,
    LegacyClient,
)
from kvcompat.config import LegacyClientConfig

__version__ = "0.1.0"

__all__ = [
    "LegacyClientConfig",
    "RetryMode",
    "TransactionOptions",
    "GenerationMode",
    "WriteOptions",
    "ScanPriority",
    "ScanOptions",
    "BinValue",
    "AddressError",
    "ResultCode",
    "OperationResult",
    "result_code_to_string",
    "LogLevel",
    "set_logging",
    "reset_logging",
    "log",
    "LegacyClient",
    "__version__",
]
