"""Inspection of the certificate presented by a TLS endpoint."""

from __future__ import annotations

import socket
import ssl
from dataclasses import dataclass, field
from datetime import datetime, timezone

from cryptography import x509
from cryptography.x509.oid import NameOID

from .netaddr import join_host_port, split_host_port


@dataclass
class ProbeResult:
    """What was learned from probing one TLS endpoint."""

    host: str
    port: str
    subject: str = ""
    issuer: str = ""
    not_before: datetime | None = None
    not_after: datetime | None = None
    dns_names: list[str] = field(default_factory=list)
    serial: str = ""
    error: str = ""


class ProbeError(Exception):
    """Raised when an endpoint could not be probed.

    ``result`` holds the partial probe result, with ``error`` filled in.
    """

    def __init__(self, message: str, result: ProbeResult | None = None) -> None:
        super().__init__(message)
        self.result = result


def _common_name(name: x509.Name) -> str:
    attributes = name.get_attributes_for_oid(NameOID.COMMON_NAME)
    return str(attributes[0].value) if attributes else ""


def _validity(cert: x509.Certificate) -> tuple[datetime, datetime]:
    before = getattr(cert, "not_valid_before_utc", None)
    after = getattr(cert, "not_valid_after_utc", None)
    if before is None or after is None:
        before = cert.not_valid_before.replace(tzinfo=timezone.utc)
        after = cert.not_valid_after.replace(tzinfo=timezone.utc)
    return before, after


def _dns_names(cert: x509.Certificate) -> list[str]:
    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
    except x509.ExtensionNotFound:
        return []
    return list(san.value.get_values_for_type(x509.DNSName))


def probe(host_port: str, timeout: float = 10.0) -> ProbeResult:
    """Connect to ``host[:port]`` over TLS and describe its leaf certificate.

    The port defaults to 443. The certificate is not verified.
    Raises ProbeError if the endpoint cannot be reached or shows no certificate.
    """
    try:
        host, port = split_host_port(host_port)
    except ValueError:
        host, port = host_port, "443"
        host_port = join_host_port(host, port)

    def fail(reason: str, message: str) -> ProbeError:
        return ProbeError(message, ProbeResult(host=host, port=port, error=reason))

    try:
        port_number = int(port)
    except ValueError:
        port_number = -1
    if not 0 <= port_number <= 65535:
        reason = f"invalid port {port!r}"
        raise fail(reason, f"connecting to {host_port}: {reason}")

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE

    try:
        with socket.create_connection((host, port_number), timeout=timeout) as raw:
            with context.wrap_socket(raw, server_hostname=host or None) as conn:
                der = conn.getpeercert(binary_form=True)
    except OSError as exc:
        raise fail(str(exc), f"connecting to {host_port}: {exc}") from exc

    if not der:
        raise fail("no certificates presented", f"no certificates from {host_port}")

    cert = x509.load_der_x509_certificate(der)
    not_before, not_after = _validity(cert)
    return ProbeResult(
        host=host,
        port=port,
        subject=_common_name(cert.subject),
        issuer=_common_name(cert.issuer),
        not_before=not_before,
        not_after=not_after,
        dns_names=_dns_names(cert),
        serial=str(cert.serial_number),
    )


def days_until_expiry(not_after: datetime) -> int:
    """Whole days from now until ``not_after``, truncated toward zero."""
    now = datetime.now() if not_after.tzinfo is None else datetime.now(timezone.utc)
    return int((not_after - now).total_seconds() / 86400)