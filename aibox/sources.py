"""Discovery of TLS endpoints from the asset graph."""

from __future__ import annotations

import logging
from typing import Any

from .netaddr import join_host_port
from .tracker import (
    ASSET_DNS_RECORD,
    ASSET_INGRESS,
    ASSET_LOAD_BALANCER,
    CertInfo,
    Tracker,
)

_log = logging.getLogger(__name__)


def _nodes_of_type(store: Any, node_type: str) -> list:
    try:
        return list(store.list_nodes(node_type=node_type))
    except Exception:  # a failing lookup just yields no endpoints
        return []


def discover_endpoints(store: Any, logger: logging.Logger | None = None) -> list[str]:
    """Collect unique ``host:443`` endpoints from ingresses, load balancers and DNS records."""
    logger = logger or _log
    endpoints: list[str] = []

    for node in _nodes_of_type(store, ASSET_INGRESS):
        for key in ("host", "hostname"):
            host = node.metadata.get(key, "")
            if host:
                endpoints.append(join_host_port(host, "443"))

    for node in _nodes_of_type(store, ASSET_LOAD_BALANCER):
        ip = node.metadata.get("ip_address", "")
        if ip:
            endpoints.append(join_host_port(ip, "443"))

    for node in _nodes_of_type(store, ASSET_DNS_RECORD):
        if node.name:
            endpoints.append(join_host_port(node.name, "443"))

    logger.info("discovered TLS endpoints from graph count=%d", len(endpoints))
    return list(dict.fromkeys(endpoints))


def probe_all(tracker: Tracker, store: Any,
              logger: logging.Logger | None = None) -> list[CertInfo]:
    """Probe every discovered endpoint, storing and returning the certificates found."""
    logger = logger or _log
    endpoints = discover_endpoints(store, logger)
    results: list[CertInfo] = []
    for endpoint in endpoints:
        try:
            results.append(tracker.probe_and_store(endpoint))
        except Exception as exc:  # one bad endpoint must not stop the rest
            logger.warning("failed to probe endpoint endpoint=%s error=%s", endpoint, exc)
    print(f"Probed {len(endpoints)} TLS endpoints, found {len(results)} certificates")
    return results