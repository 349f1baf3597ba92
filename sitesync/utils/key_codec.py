"""
State-map key encoding.

State maps cannot hold ``.`` in their keys, so every dot in a relative
path is written as ``%%``. A path that already contains ``%%`` does not
survive the round trip: ``a%%b`` and ``a.b`` encode to the same key.
"""

DOT = "."
ESCAPE = "%%"


def encode_key(relative_path: str) -> str:
    """Encode a relative file path into a state-map key.

    Example:
        >>> encode_key("assets/app.js")
        'assets/app%%js'
    """
    return relative_path.replace(DOT, ESCAPE)


def decode_key(key: str) -> str:
    """Decode a state-map key back into a relative file path.

    Example:
        >>> decode_key("assets/app%%js")
        'assets/app.js'
    """
    return key.replace(ESCAPE, DOT)
