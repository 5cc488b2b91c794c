"""
Short human-typed codes (academy join codes, child connection codes).
"""

import secrets

# No 0/O or 1/I/L, codes are read aloud and typed on phones
CODE_ALPHABET = 'ABCDEFGHJKMNPQRSTUVWXYZ23456789'
CODE_LENGTH = 6
MAX_ATTEMPTS = 10


def generate_code(exists=None, length: int = CODE_LENGTH) -> str:
    """
    Generate a random code, retrying while `exists(code)` reports a clash.

    Raises:
        RuntimeError: If no free code is found after MAX_ATTEMPTS tries
    """
    for _ in range(MAX_ATTEMPTS):
        code = ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))
        if exists is None or not exists(code):
            return code
    raise RuntimeError('Could not generate a unique code')
