# kvcompat/config.py
# SPDX-License-Identifier: Apache-2.0
"""
Facade configuration.

`LegacyClientConfig` bundles what `LegacyClient.from_config` needs: seed
hosts, the default namespace used by the single-bin convenience calls, and
the initial log level. It can be built directly or from the environment:

    KVCOMPAT_HOSTS       comma-separated host[:port] list (default port 3000)
    KVCOMPAT_NAMESPACE   default namespace (default "ns")
    KVCOMPAT_LOG_LEVEL   ERROR | WARN | INFO | DEBUG | VERBOSE (default INFO)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from kvcompat.legacy.logging_shim import LogLevel

DEFAULT_PORT = 3000
DEFAULT_NAMESPACE = "ns"


def parse_hosts(raw: str, default_port: int = DEFAULT_PORT) -> Tuple[Tuple[str, int], ...]:
    """Parse "host[:port],host[:port]" into (host, port) pairs."""
    hosts = []
    for item in (raw or "").split(","):
        item = item.strip()
        if not item:
            continue
        host, sep, port = item.rpartition(":")
        if not sep:
            hosts.append((item, default_port))
            continue
        try:
            hosts.append((host, int(port)))
        except ValueError:
            raise ValueError(f"invalid host entry: {item!r}") from None
    return tuple(hosts)


@dataclass(frozen=True)
class LegacyClientConfig:
    """Immutable facade configuration with validation."""

    hosts: Tuple[Tuple[str, int], ...] = ()
    default_namespace: str = DEFAULT_NAMESPACE
    log_level: LogLevel = LogLevel.INFO

    def validate(self) -> None:
        if not self.default_namespace:
            raise ValueError("default_namespace cannot be empty")
        for host, port in self.hosts:
            if not host:
                raise ValueError("host name cannot be empty")
            if not isinstance(port, int) or not 0 < port < 65536:
                raise ValueError(f"invalid port for {host}: {port!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LegacyClientConfig":
        env = os.environ if environ is None else environ
        cfg = cls(
            hosts=parse_hosts(env.get("KVCOMPAT_HOSTS", "")),
            default_namespace=env.get("KVCOMPAT_NAMESPACE") or DEFAULT_NAMESPACE,
            log_level=LogLevel.parse(env.get("KVCOMPAT_LOG_LEVEL") or "INFO"),
        )
        cfg.validate()
        return cfg


__all__ = ["DEFAULT_PORT", "DEFAULT_NAMESPACE", "parse_hosts", "LegacyClientConfig"]
