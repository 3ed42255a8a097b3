import socket
import ssl
import threading
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from aibox.prober import ProbeError, days_until_expiry, probe


def _write_cert(tmp_path, serial):
    key = ec.generate_private_key(ec.SECP256R1())
    subject = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "test.example.com")])
    issuer = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "Example Test CA")])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(key.public_key())
        .serial_number(serial)
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=365))
        .add_extension(
            x509.SubjectAlternativeName(
                [x509.DNSName("test.example.com"), x509.DNSName("www.example.com")]
            ),
            critical=False,
        )
        .sign(key, hashes.SHA256())
    )
    certfile = tmp_path / "cert.pem"
    keyfile = tmp_path / "key.pem"
    certfile.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    keyfile.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return certfile, keyfile


def _serve(listener, context, stop):
    while not stop.is_set():
        try:
            conn, _ = listener.accept()
        except socket.timeout:
            continue
        except OSError:
            break
        conn.settimeout(5)
        try:
            with context.wrap_socket(conn, server_side=True):
                pass
        except OSError:
            conn.close()


@pytest.fixture
def tls_server(tmp_path):
    serial = 123456789
    certfile, keyfile = _write_cert(tmp_path, serial)
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(str(certfile), str(keyfile))
    listener = socket.socket()
    listener.bind(("127.0.0.1", 0))
    listener.listen()
    listener.settimeout(0.1)
    stop = threading.Event()
    thread = threading.Thread(target=_serve, args=(listener, context, stop), daemon=True)
    thread.start()
    host, port = listener.getsockname()
    yield host, str(port), serial
    stop.set()
    thread.join(timeout=5)
    listener.close()


def test_probe_local_tls(tls_server):
    host, port, _ = tls_server
    result = probe(f"{host}:{port}", 5)
    assert result.host == host
    assert result.port == port
    assert result.not_after is not None and result.not_before is not None
    assert result.not_before < result.not_after
    assert result.serial != ""
    assert result.error == ""


def test_probe_cert_details(tls_server):
    host, port, serial = tls_server
    result = probe(f"{host}:{port}", 5)
    assert result.not_after > datetime.now(timezone.utc)
    assert result.serial == str(serial)
    assert result.subject == "test.example.com"
    assert result.issuer == "Example Test CA"
    assert result.dns_names == ["test.example.com", "www.example.com"]


def test_probe_invalid_host():
    with pytest.raises(ProbeError):
        probe("invalid-host-that-does-not-exist.local:9999", 2)


def test_probe_default_port():
    with pytest.raises(ProbeError) as info:
        probe("invalid-host-no-port.local", 1)
    assert info.value.result.port == "443"
    assert info.value.result.host == "invalid-host-no-port.local"


def test_probe_refused_port_keeps_error():
    sock = socket.socket()
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    with pytest.raises(ProbeError) as info:
        probe(f"127.0.0.1:{port}", 2)
    assert info.value.result.port == str(port)
    assert info.value.result.error != ""
    assert str(info.value).startswith(f"connecting to 127.0.0.1:{port}")


def test_probe_bad_port():
    with pytest.raises(ProbeError) as info:
        probe("127.0.0.1:notaport", 1)
    assert info.value.result.port == "notaport"


@pytest.mark.parametrize(
    "delta, low, high",
    [
        (timedelta(days=30), 29, 31),
        (timedelta(days=1), 0, 2),
        (timedelta(days=-1), -2, 0),
        (timedelta(0), -1, 1),
    ],
)
def test_days_until_expiry(delta, low, high):
    got = days_until_expiry(datetime.now(timezone.utc) + delta)
    assert low <= got <= high


def test_days_until_expiry_naive():
    got = days_until_expiry(datetime.now() + timedelta(days=10, hours=1))
    assert got == 10