# kvcompat/core/error_context.py
# SPDX-License-Identifier: Apache-2.0
"""
Error context utilities.

Helpers for attaching debugging context to a cluster error at the facade
boundary, before it is normalized into a result code and logged. The
context is stored as an attribute on the exception, so the exception type,
message and native code are left untouched.

Typical usage
-------------

    try:
        cluster.put(policy, key, bins)
    except ClusterClientError as exc:
        attach_context(exc, "legacy_client", operation="set", namespace="test")
        LOG.debug("set failed", extra=dict(get_context(exc)))

Multiple calls merge rather than overwrite, so a cluster client binding and
the facade can each contribute keys. The first `component` recorded is
kept.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping

logger = logging.getLogger(__name__)

_CONTEXT_ATTR = "__kvcompat_context__"


def attach_context(
    exc: BaseException,
    component: str,
    **context: Any,
) -> None:
    """
    Attach debugging context to an exception.

    Parameters
    ----------
    exc:
        The exception to enrich.

    component:
        Origin of the context, e.g. "legacy_client" or "aerospike". Stored
        under the `component` key unless one is already present.

    **context:
        Arbitrary keys such as `operation`, `namespace`, `set_name`,
        `node_name` or `batch_size`. Avoid user keys and bin values.

    Attachment is best-effort: a failure here is logged at DEBUG and never
    replaces the original exception.
    """
    try:
        merged: MutableMapping[str, Any] = {}
        existing = getattr(exc, _CONTEXT_ATTR, None)
        if isinstance(existing, Mapping):
            merged.update(existing)

        merged.setdefault("component", component)
        merged.update(context)
        setattr(exc, _CONTEXT_ATTR, merged)
    except Exception as attachment_error:  # noqa: BLE001
        logger.debug(
            "Failed to attach error context to %s: %s",
            type(exc).__name__,
            attachment_error,
            extra={"component": component},
        )


def get_context(exc: BaseException) -> Mapping[str, Any]:
    """Return the attached context, or an empty dict."""
    ctx = getattr(exc, _CONTEXT_ATTR, None)
    if isinstance(ctx, Mapping):
        return ctx
    return {}


__all__ = ["attach_context", "get_context"]
