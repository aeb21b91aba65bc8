import hashlib
import random

# Largest signed 64-bit value; keeps seeds portable to anything that stores them
MAX_SEED = 9223372036854775807


class InvalidSeed(ValueError):
    pass


def coerce_seed(seed):
    """Convert a provided seed (int or str) into a bounded non-negative int.

    None or a blank string draws a random seed. Digit strings are read as
    integers; any other string is hashed with SHA-256 so memorable phrases
    work as seeds.
    """
    if seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(seed, bool):
        raise InvalidSeed("seed must be an integer or string")
    if isinstance(seed, int):
        return seed % MAX_SEED
    if isinstance(seed, str):
        s = seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode('utf-8')).digest()
        return int.from_bytes(h[:8], 'big') % MAX_SEED
    raise InvalidSeed("seed must be an integer or string")
