"""Certificate discovery and expiry tracking on top of the asset store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .prober import ProbeError, days_until_expiry, probe

ASSET_CERTIFICATE = "certificate"
ASSET_INGRESS = "ingress"
ASSET_LOAD_BALANCER = "load_balancer"
ASSET_DNS_RECORD = "dns_record"

DEFAULT_THRESHOLDS = [90, 60, 30, 14, 7, 1]


@dataclass
class Node:
    """An asset in the graph."""

    id: str
    name: str = ""
    type: str = ""
    source: str = ""
    source_file: str = ""
    provider: str = ""
    expires_at: datetime | None = None
    last_seen: datetime | None = None
    first_seen: datetime | None = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class CertInfo:
    """A certificate node with its expiry details."""

    node: Node
    days_remaining: int
    status: str


def expiry_status(days: int) -> str:
    """Classify remaining days as expired, critical, warning or ok."""
    if days < 0:
        return "expired"
    if days <= 7:
        return "critical"
    if days <= 30:
        return "warning"
    return "ok"


def _rfc3339(ts: datetime) -> str:
    text = ts.isoformat(timespec="seconds")
    return text[:-6] + "Z" if text.endswith("+00:00") else text


class Tracker:
    """Tracks certificates stored in an asset store.

    The store provides ``list_nodes(node_type=...)``, ``expiring_nodes(days)``
    and ``upsert_node(node)``.
    """

    def __init__(self, store: Any, thresholds: list[int] | None = None,
                 logger: logging.Logger | None = None) -> None:
        self.store = store
        self.thresholds = list(DEFAULT_THRESHOLDS if thresholds is None else thresholds)
        self.logger = logger or logging.getLogger(__name__)
        self.probe_timeout = 10.0

    def list_certs(self) -> list[CertInfo]:
        """All certificate nodes with their expiry status."""
        certs = []
        for node in self.store.list_nodes(node_type=ASSET_CERTIFICATE):
            if node.expires_at is not None:
                days = days_until_expiry(node.expires_at)
                certs.append(CertInfo(node, days, expiry_status(days)))
            else:
                certs.append(CertInfo(node, -1, "unknown"))
        return certs

    def expiring_certs(self, days: int) -> list[CertInfo]:
        """Certificates expiring within ``days`` days."""
        certs = []
        for node in self.store.expiring_nodes(days):
            if node.type != ASSET_CERTIFICATE or node.expires_at is None:
                continue
            remaining = days_until_expiry(node.expires_at)
            certs.append(CertInfo(node, remaining, expiry_status(remaining)))
        return certs

    def probe_and_store(self, host_port: str) -> CertInfo:
        """Probe a TLS endpoint and store its certificate as a node."""
        try:
            result = probe(host_port, self.probe_timeout)
        except ProbeError as exc:
            raise ProbeError(f"probing {host_port}: {exc}", exc.result) from exc

        now = datetime.now(timezone.utc)
        not_before = _rfc3339(result.not_before) if result.not_before else ""
        node = Node(
            id=f"probe:certificate:{result.host}",
            name=result.subject,
            type=ASSET_CERTIFICATE,
            source="probe",
            source_file=host_port,
            provider=result.issuer,
            expires_at=result.not_after,
            last_seen=now,
            first_seen=now,
            metadata={
                "host": result.host,
                "port": result.port,
                "issuer": result.issuer,
                "serial": result.serial,
                "dns_names": "[" + " ".join(result.dns_names) + "]",
                "not_before": not_before,
            },
        )
        self.store.upsert_node(node)

        days = days_until_expiry(result.not_after)
        info = CertInfo(node, days, expiry_status(days))
        self.logger.info(
            "probed certificate host=%s subject=%s expires=%s days_remaining=%d",
            host_port, result.subject, result.not_after.strftime("%Y-%m-%d"), days,
        )
        return info