# ABOUTME: Identity helpers: null-identity detection, total order and canonical pair keys.
# ABOUTME: Pair keys are SHA-256 digests of the byte-wise ordered, length-prefixed identities.

import hashlib
import re

ZERO_IDENTITY = "0x" + "0" * 40

_ZERO_HEX = re.compile(r"^0x0+$", re.IGNORECASE)


def is_null_identity(identity: str | None) -> bool:
    """Return True for the null identity.

    None, an empty or whitespace-only string and any all-zero hex
    address ("0x000...") all count as null.
    """
    if identity is None or not identity.strip():
        return True
    return bool(_ZERO_HEX.match(identity))


def identity_bytes(identity: str) -> bytes:
    """Encode an identity for ordering and hashing."""
    return identity.encode("utf-8")


def order_pair(identity_a: str, identity_b: str) -> tuple[str, str]:
    """Order two identities so the smaller one comes first.

    The order is a byte-wise comparison of the UTF-8 encodings, which is
    reproducible regardless of locale or platform.

    Returns:
        Tuple of (low_identity, high_identity).
    """
    if identity_bytes(identity_a) <= identity_bytes(identity_b):
        return identity_a, identity_b
    return identity_b, identity_a


def canonical_pair_key(identity_a: str, identity_b: str) -> str:
    """Derive the order-independent key for an unordered identity pair.

    Each identity is prefixed with its 4-byte big-endian length so that
    distinct pairs never share the hashed input.

    Args:
        identity_a: One endpoint of the pair.
        identity_b: The other endpoint.

    Returns:
        64-character hex SHA-256 digest; identical for (a, b) and (b, a).
    """
    low, high = order_pair(identity_a, identity_b)
    digest = hashlib.sha256()
    for part in (identity_bytes(low), identity_bytes(high)):
        digest.update(len(part).to_bytes(4, "big"))
        digest.update(part)
    return digest.hexdigest()
