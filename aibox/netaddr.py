"""Splitting and joining of host:port network addresses."""

from __future__ import annotations


def split_host_port(host_port: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[host]:port`` into host and port.

    Raises ValueError for a missing port, too many colons, or bad brackets.
    """
    if host_port.startswith("["):
        end = host_port.find("]")
        if end < 0:
            raise ValueError(f"address {host_port}: missing ']' in address")
        host = host_port[1:end]
        rest = host_port[end + 1:]
        if not rest:
            raise ValueError(f"address {host_port}: missing port in address")
        if not rest.startswith(":"):
            raise ValueError(f"address {host_port}: unexpected text after ']'")
        port = rest[1:]
        if ":" in port:
            raise ValueError(f"address {host_port}: too many colons in address")
        if "[" in host or "]" in port or "[" in port:
            raise ValueError(f"address {host_port}: unexpected bracket in address")
        return host, port

    colon = host_port.rfind(":")
    if colon < 0:
        raise ValueError(f"address {host_port}: missing port in address")
    host, port = host_port[:colon], host_port[colon + 1:]
    if ":" in host:
        raise ValueError(f"address {host_port}: too many colons in address")
    if any(ch in host_port for ch in "[]"):
        raise ValueError(f"address {host_port}: unexpected bracket in address")
    return host, port


def join_host_port(host: str, port: str | int) -> str:
    """Join a host and port, bracketing hosts that contain a colon."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"