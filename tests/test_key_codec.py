from __future__ import annotations

from sitesync.utils.key_codec import decode_key, encode_key


def test_dots_are_escaped():
    assert encode_key("assets/app.min.js") == "assets/app%%min%%js"


def test_decode_restores_path():
    assert decode_key("assets/app%%min%%js") == "assets/app.min.js"


def test_paths_without_dots_are_untouched():
    assert encode_key("LICENSE") == "LICENSE"
    assert decode_key("LICENSE") == "LICENSE"


def test_literal_escape_collides_with_dot():
    assert encode_key("a%%b") == encode_key("a.b")
    assert decode_key(encode_key("a%%b")) == "a.b"
