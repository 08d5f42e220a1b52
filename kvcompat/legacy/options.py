# kvcompat/legacy/options.py
# SPDX-License-Identifier: Apache-2.0
"""
Legacy per-call option objects.

These are the knobs older callers pass on every request:

- `TransactionOptions`: a single timeout plus a retry mode
- `WriteOptions`: expiration, create-only flag and a generation mode
- `ScanOptions`: node concurrency, priority and cluster-change behavior
- `BinValue`: a flat name/value pair

They are plain mutable dataclasses. Callers may reuse one instance across
calls and change it in between, but not while a call that received it is in
flight. Nothing here talks to the cluster; `policy_translation` turns these
into cluster policies.

Generation modes
----------------
Older callers had four setters (`set_generation`, `set_generation_gt`,
`set_generation_dup`, plus the `unique` flag). Here the three generation
setters all write a single `GenerationMode` value, so the last one called
wins. `unique` is stored separately and always takes precedence over any
generation mode when translated.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_TIMEOUT_MILLIS = 5000


class RetryMode(enum.Enum):
    RETRY = "retry"
    ONE_SHOT = "one_shot"


@dataclass
class TransactionOptions:
    """
    Timeout and retry behavior for one call.

    Attributes:
        timeout_millis: Total budget in milliseconds (0 = no timeout)
        retry_mode: RETRY lets the cluster client retry within the budget;
            ONE_SHOT issues a single attempt
    """

    timeout_millis: int = DEFAULT_TIMEOUT_MILLIS
    retry_mode: RetryMode = RetryMode.RETRY

    def set_one_shot(self) -> "TransactionOptions":
        self.retry_mode = RetryMode.ONE_SHOT
        return self

    def set_timeout(self, timeout_millis: int) -> "TransactionOptions":
        self.timeout_millis = int(timeout_millis)
        return self


class GenerationKind(enum.Enum):
    NONE = "none"
    EXPECT_EQUAL = "expect_equal"
    EXPECT_GREATER_OR_EQUAL = "expect_greater_or_equal"
    ON_MISMATCH_KEEP_DUPLICATE = "on_mismatch_keep_duplicate"


@dataclass(frozen=True)
class GenerationMode:
    """Tagged generation check: a kind plus the generation it compares against."""

    kind: GenerationKind = GenerationKind.NONE
    generation: int = 0

    @classmethod
    def none(cls) -> "GenerationMode":
        return cls()

    @classmethod
    def expect_equal(cls, generation: int) -> "GenerationMode":
        return cls(GenerationKind.EXPECT_EQUAL, int(generation))

    @classmethod
    def expect_greater_or_equal(cls, generation: int) -> "GenerationMode":
        return cls(GenerationKind.EXPECT_GREATER_OR_EQUAL, int(generation))

    @classmethod
    def on_mismatch_keep_duplicate(cls, generation: int) -> "GenerationMode":
        return cls(GenerationKind.ON_MISMATCH_KEEP_DUPLICATE, int(generation))


@dataclass
class WriteOptions:
    """
    Write-side options.

    Attributes:
        expiration: Record time-to-live in seconds (0 = server default / never)
        unique: Create-only; the write fails if the record already exists
        generation_mode: Optimistic concurrency check, see `GenerationMode`
    """

    expiration: int = 0
    unique: bool = False
    generation_mode: GenerationMode = field(default_factory=GenerationMode)

    def set_expiration(self, seconds: int) -> "WriteOptions":
        self.expiration = int(seconds)
        return self

    def set_unique(self, unique: bool = True) -> "WriteOptions":
        self.unique = bool(unique)
        return self

    def set_generation(self, generation: int) -> "WriteOptions":
        """Require the stored generation to equal `generation`."""
        self.generation_mode = GenerationMode.expect_equal(generation)
        return self

    def set_generation_gt(self, generation: int) -> "WriteOptions":
        """Require the stored generation to be at least `generation` (backup restore)."""
        self.generation_mode = GenerationMode.expect_greater_or_equal(generation)
        return self

    def set_generation_dup(self, generation: int) -> "WriteOptions":
        """Like `set_generation`, but keep a duplicate version on mismatch."""
        self.generation_mode = GenerationMode.on_mismatch_keep_duplicate(generation)
        return self


class ScanPriority(enum.Enum):
    AUTO = "auto"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class ScanOptions:
    """
    Scan behavior.

    `threads_per_node` is advisory; the cluster client may ignore it.
    `priority` is honored by the server.
    """

    concurrent_nodes: bool = True
    threads_per_node: int = 1
    priority: ScanPriority = ScanPriority.AUTO
    fail_on_cluster_change: bool = False


@dataclass(frozen=True)
class BinValue:
    """A bin name and its value. `name` may be None on single-bin namespaces."""

    name: Optional[str]
    value: Any


__all__ = [
    "DEFAULT_TIMEOUT_MILLIS",
    "RetryMode",
    "TransactionOptions",
    "GenerationKind",
    "GenerationMode",
    "WriteOptions",
    "ScanPriority",
    "ScanOptions",
    "BinValue",
]
