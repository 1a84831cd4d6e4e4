"""Repackage a vault certificate secret as a password-protected PFX (PKCS#12)."""

from __future__ import annotations

import base64
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.serialization import pkcs12

from ssl_binder.errors import InvalidCertificateSecret
from ssl_binder.models import SecretValue

logger = logging.getLogger(__name__)

PEM_CONTENT_TYPE = "application/x-pem-file"
SCRATCH_PREFIX = "SslCert-"
SCRATCH_SUFFIX = ".pfx"


def _load_pkcs12(secret_value: str):
    """Load an unprotected base64 PKCS#12 export as (key, cert, chain)."""
    raw = base64.b64decode(secret_value)
    key, cert, chain = pkcs12.load_key_and_certificates(raw, password=None)
    return key, cert, list(chain)


def _load_pem(secret_value: str):
    """Load a PEM bundle (private key plus end-entity certificate first, then chain)."""
    data = secret_value.encode()
    certs = x509.load_pem_x509_certificates(data)
    if not certs:
        raise ValueError("No certificates found in PEM secret")
    if b"PRIVATE KEY-----" not in data:
        return None, certs[0], certs[1:]
    key = serialization.load_pem_private_key(data, password=None)
    return key, certs[0], certs[1:]


def _encryption_for(password: str) -> serialization.KeySerializationEncryption:
    # App Service only accepts the legacy SHA1/3DES PBES profile
    return (
        serialization.PrivateFormat.PKCS12.encryption_builder()
        .kdf_rounds(50000)
        .key_cert_algorithm(pkcs12.PBES.PBESv1SHA1And3KeyTripleDESCBC)
        .hmac_hash(hashes.SHA1())
        .build(password.encode())
    )


def repackage_certificate(secret: SecretValue, password: str, friendly_name: str | None = None) -> bytes:
    """Rebuild the certificate held in ``secret`` and export it protected by ``password``.

    Key Vault stores a certificate's secret either as a base64 PKCS#12 export
    without a password (the default) or as PEM text when the certificate
    policy asked for ``application/x-pem-file``. Both are accepted.

    Returns PFX bytes that the Key Vault import API accepts with the same password.

    Raises:
        InvalidCertificateSecret: the secret does not decode, or lacks the
            certificate or its private key.
    """
    fmt = "PEM" if secret.content_type == PEM_CONTENT_TYPE else "PKCS#12"
    try:
        if fmt == "PEM":
            key, cert, chain = _load_pem(secret.value)
        else:
            key, cert, chain = _load_pkcs12(secret.value)
    except ValueError as e:
        # binascii.Error from bad base64 is a ValueError too
        raise InvalidCertificateSecret(f"Secret '{secret.name}' is not a readable {fmt} certificate: {e}") from e

    if cert is None:
        raise InvalidCertificateSecret(f"Secret '{secret.name}' holds no certificate")
    if key is None:
        raise InvalidCertificateSecret(f"Secret '{secret.name}' holds no private key")

    pfx = pkcs12.serialize_key_and_certificates(
        name=friendly_name.encode() if friendly_name else None,
        key=key,
        cert=cert,
        cas=chain or None,
        encryption_algorithm=_encryption_for(password),
    )
    logger.info("Repackaged '%s' with %d chain certificate(s)", secret.name, len(chain))
    return pfx


@contextmanager
def scratch_file(data: bytes, directory: str | os.PathLike) -> Iterator[Path]:
    """Write ``data`` to a fresh ``SslCert-*.pfx`` file in ``directory`` and remove it on exit.

    Every call gets its own file, so concurrent runs sharing a scratch
    directory do not collide.
    """
    fd, name = tempfile.mkstemp(prefix=SCRATCH_PREFIX, suffix=SCRATCH_SUFFIX, dir=directory)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        logger.debug("Wrote scratch certificate to %s", path)
        yield path
    finally:
        path.unlink(missing_ok=True)
