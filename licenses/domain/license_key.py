"""
License key generation and format checking.

Keys are four groups of four characters drawn from [A-Z0-9]
joined by dashes, e.g. ``7QX2-M4KD-09ZR-B8TT``. A generated key
is only a candidate: uniqueness is enforced by the store.
"""

import random
import re
import secrets
import string
from typing import Optional

LICENSE_KEY_ALPHABET = string.ascii_uppercase + string.digits
LICENSE_KEY_GROUPS = 4
LICENSE_KEY_GROUP_LENGTH = 4
LICENSE_KEY_PATTERN = re.compile(r"[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}-[A-Z0-9]{4}")

_system_random = secrets.SystemRandom()


def generate_license_key(rng: Optional[random.Random] = None) -> str:
    """
    Generate a license key in format: XXXX-XXXX-XXXX-XXXX.

    Args:
        rng: Random source (defaults to the OS CSPRNG)

    Returns:
        Generated license key string
    """
    rng = rng or _system_random
    parts = [
        "".join(rng.choice(LICENSE_KEY_ALPHABET) for _ in range(LICENSE_KEY_GROUP_LENGTH))
        for _ in range(LICENSE_KEY_GROUPS)
    ]
    return "-".join(parts)


def is_valid_license_key_format(value) -> bool:
    """
    Check a string against the license key format.

    Args:
        value: Candidate key

    Returns:
        True if the whole string matches XXXX-XXXX-XXXX-XXXX
    """
    if not isinstance(value, str):
        return False
    return LICENSE_KEY_PATTERN.fullmatch(value) is not None
