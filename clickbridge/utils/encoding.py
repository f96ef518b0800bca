import secrets

# Base62 alphabet. Changing it or the length breaks stored cids.
ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)
CID_LENGTH = 10
PREFIX_MAX_LENGTH = 3


def _random_symbols(count: int) -> str:
    return ''.join(secrets.choice(ALPHABET) for _ in range(count))


def generate_cid() -> str:
    """Generate a cryptographically secure random 10-character base62 click id.

    62**10 is roughly 8.4e17 combinations, so collisions are not checked for.
    """
    return _random_symbols(CID_LENGTH)


def generate_cid_with_prefix(prefix: str) -> str:
    """Generate a cid whose first characters are taken from ``prefix``.

    Only the first three characters of the prefix are used, the rest is
    random. Handy for spotting test or debug traffic in the click table.
    """
    head = (prefix or "")[:PREFIX_MAX_LENGTH]
    return (head + _random_symbols(CID_LENGTH - len(head)))[:CID_LENGTH]


def is_valid_cid(candidate) -> bool:
    """Check that ``candidate`` is exactly 10 base62 characters. Never raises."""
    if not isinstance(candidate, str) or len(candidate) != CID_LENGTH:
        return False
    return all(ch in ALPHABET for ch in candidate)
