"""Change fingerprints for raw diff text.

The fingerprint is used only to notice that a file's diff has changed since
it was last seen. It is not a security hash.
"""

from __future__ import annotations

DJB2_SEED = 5381
HASH_MODULUS = 0x100000000


def compute_fingerprint(diff_text: str) -> str:
    """Compute a djb2 hash of the diff text as 8 lowercase hex digits.

    Examples:
        >>> compute_fingerprint("")
        '00001505'
    """
    value = DJB2_SEED
    for byte in diff_text.encode("utf-8"):
        value = (value * 33 + byte) % HASH_MODULUS
    return f"{value:08x}"
