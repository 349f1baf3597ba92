"""
Exclusion filter for state maps.
"""
from typing import Dict

from .key_codec import decode_key


def filter_state(state_map: Dict[str, str], pattern: str) -> Dict[str, str]:
    """Drop every key that contains *pattern*.

    The match is a case-sensitive substring test against both the encoded
    key and its decoded path, so ``.map`` excludes ``app%%js%%map``.

    Args:
        state_map: Encoded key to fingerprint mapping
        pattern: Substring to exclude; empty means keep everything

    Returns:
        New mapping without the excluded keys
    """
    if not pattern:
        return dict(state_map)

    return {
        key: fingerprint
        for key, fingerprint in state_map.items()
        if pattern not in key and pattern not in decode_key(key)
    }
