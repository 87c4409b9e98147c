# ffeval/services/rollout.py
"""Deterministic percentage rollout.

The bucket for a user is derived from a 32-bit FNV-1a hash of
``"<flag_key>:<user_id>"`` (UTF-8). The algorithm is a cross-language
contract: every port must place the same user in the same bucket.
"""


from __future__ import annotations

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
_UINT32_MASK = 0xFFFFFFFF
_BUCKET_SPAN = float(1 << 32)


def fnv1a_32(data: bytes) -> int:
    """Return the 32-bit FNV-1a hash of ``data`` as an unsigned int."""
    h = FNV_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * FNV_PRIME) & _UINT32_MASK
    return h


def rollout_bucket(flag_key: str, user_id: str) -> float:
    """Map ``(flag_key, user_id)`` to a stable bucket in ``[0, 1)``."""
    digest = fnv1a_32(f"{flag_key}:{user_id}".encode("utf-8"))
    return digest / _BUCKET_SPAN


def rollout(flag_key: str, user_id: str, p: float) -> bool:
    """Return True when the user's bucket for this flag is below ``p``.

    Args:
        flag_key: Key of the flag being rolled out.
        user_id: Stable user identifier (empty string when unknown).
        p: Exposure fraction; ``0`` disables, ``1`` enables everyone.

    Returns:
        bool: Whether the user falls inside the rollout.
    """
    return rollout_bucket(flag_key, user_id) < p
