"""
Determinism helpers.

Goals:
- Give every session its own seeded RNG streams (no process-wide generator)
- Provide stable sub-streams derived from a base seed (avoid hidden coupling between systems)

Non-goals:
- Cryptographic security
- Perfect cross-language reproducibility (this is Python's Mersenne Twister)
"""

from __future__ import annotations

import random
import zlib


def derive_seed(base_seed: int, tag: str) -> int:
    """Mix a base seed with a stream tag into a 32-bit seed."""
    # Use stable hashing (NEVER Python's built-in hash(), which is randomized per process).
    crc = zlib.crc32(tag.encode("utf-8")) & 0xFFFFFFFF
    return ((int(base_seed) & 0xFFFFFFFF) ^ crc) & 0xFFFFFFFF


def make_rng(base_seed: int, tag: str) -> random.Random:
    """
    Get an independent RNG stream for one system of one session.

    Two calls with the same `(base_seed, tag)` produce identical sequences; different tags
    produce unrelated sequences, so adding draws in one system never shifts another.
    """
    return random.Random(derive_seed(base_seed, str(tag)))
