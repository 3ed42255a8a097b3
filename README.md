# aibox

Helpers for keeping track of infrastructure assets: probe the TLS
certificate an endpoint serves, classify certificates by how close they are
to expiry, find TLS endpoints among known assets, and render the tree of
assets affected when one of them fails.

## Install

```
pip install .
```

With the test extra:

```
pip install ".[test]"
pytest
```

## Modules

- `aibox.prober`: `probe(host_port, timeout=10.0)` connects over TLS
  (port 443 if none is given; the certificate is not verified) and returns a
  `ProbeResult` with host, port, subject and issuer common names, validity
  dates, DNS names and serial number. Failures raise `ProbeError`, whose
  `result` carries the partial result. `days_until_expiry(not_after)` gives
  whole days left, truncated toward zero.
- `aibox.tracker`: `Node`, `CertInfo`, `expiry_status(days)` (`expired`
  below 0, `critical` up to 7, `warning` up to 30, otherwise `ok`) and
  `Tracker`, with `list_certs()`, `expiring_certs(days)` and
  `probe_and_store(host_port)`.
- `aibox.sources`: `discover_endpoints(store, logger)` collects unique
  `host:443` endpoints from ingress nodes (`host`, `hostname` metadata), load
  balancers (`ip_address` metadata) and DNS record names;
  `probe_all(tracker, store, logger)` probes each of them, skipping failures.
- `aibox.treeview`: `ImpactNode`, `count_tree_nodes`, `collect_warnings`
  (nodes expiring within 30 days) and `print_tree`, which draws the tree
  with box-drawing connectors and edge types.
- `aibox.output`: `parse_log_level`, `format_bytes` (e.g. `1.5 KB`),
  `ScanResult` and `print_scan_result`.
- `aibox.netaddr`: `split_host_port` and `join_host_port`, bracketing IPv6
  hosts.
- `aibox.durations`: `parse_duration` (strings such as `6h`, `1h30m`,
  `500ms`, returned in seconds; bad input raises `ValueError`) and
  `format_duration`.

## Example

`Tracker` and the discovery functions work against any store object that
provides `list_nodes(node_type=...)`, `expiring_nodes(days)` and
`upsert_node(node)`:

```python
from datetime import datetime, timedelta, timezone

from aibox.tracker import Node, Tracker


class MemoryStore:
    def __init__(self):
        self.nodes = {}

    def upsert_node(self, node):
        self.nodes[node.id] = node

    def list_nodes(self, node_type=""):
        return [n for n in self.nodes.values() if not node_type or n.type == node_type]

    def expiring_nodes(self, days):
        limit = datetime.now(timezone.utc) + timedelta(days=days)
        return [n for n in self.nodes.values() if n.expires_at and n.expires_at <= limit]


store = MemoryStore()
store.upsert_node(Node(id="cert:web", name="web", type="certificate",
                       expires_at=datetime.now(timezone.utc) + timedelta(days=10)))
for info in Tracker(store).list_certs():
    print(info.node.id, info.days_remaining, info.status)
```

## What it does not do

There is no command-line program, no configuration file loading, no
persistent asset database, no alert delivery (standard output or webhook)
and no periodic probing schedule. Storage is whatever object the caller
passes in, and scheduling and alerting are left to the caller.