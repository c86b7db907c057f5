import re

import pytest

from tubely.domain.errors import KeyDerivationFailure, UnsupportedMediaType
from tubely.domain.policies import storage_keys
from tubely.domain.policies.storage_keys import (
    derive_storage_key,
    extension_for_media_type,
    parse_media_type,
    random_token,
)

TOKEN_RE = re.compile(r"^[A-Za-z0-9_-]{43}$")


def test_token_is_43_urlsafe_chars_without_padding():
    tok = random_token()
    assert TOKEN_RE.match(tok), tok
    assert "=" not in tok


def test_video_key_shape():
    key = derive_storage_key("mp4", prefix="landscape")
    prefix, name = key.split("/")
    assert prefix == "landscape"
    stem, ext = name.rsplit(".", 1)
    assert ext == "mp4"
    assert TOKEN_RE.match(stem)


def test_thumbnail_key_has_no_prefix():
    key = derive_storage_key("png")
    assert "/" not in key
    assert key.endswith(".png")


def test_no_collisions_across_10k_keys():
    keys = {derive_storage_key("mp4", prefix="other") for _ in range(10_000)}
    assert len(keys) == 10_000


def test_randomness_failure_is_fatal(monkeypatch):
    def _broken(n):
        raise NotImplementedError("no CSPRNG")

    monkeypatch.setattr(storage_keys.secrets, "token_bytes", _broken)
    with pytest.raises(KeyDerivationFailure):
        derive_storage_key("mp4", prefix="landscape")


def test_short_read_is_fatal(monkeypatch):
    monkeypatch.setattr(storage_keys.secrets, "token_bytes", lambda n: b"\x00" * (n - 1))
    with pytest.raises(KeyDerivationFailure):
        random_token()


def test_empty_extension_rejected():
    with pytest.raises(KeyDerivationFailure):
        derive_storage_key("")


@pytest.mark.parametrize(
    "ctype,expected",
    [
        ("video/mp4", "video/mp4"),
        ("VIDEO/MP4", "video/mp4"),
        ("video/mp4; codecs=\"avc1.42E01E\"", "video/mp4"),
        ("  image/png ", "image/png"),
    ],
)
def test_parse_media_type(ctype, expected):
    assert parse_media_type(ctype) == expected


@pytest.mark.parametrize("ctype", [None, "", "mp4", "video/", "/mp4"])
def test_parse_media_type_rejects_garbage(ctype):
    with pytest.raises(UnsupportedMediaType):
        parse_media_type(ctype)


@pytest.mark.parametrize(
    "ctype,ext",
    [("image/png", "png"), ("image/jpeg", "jpeg"), ("image/webp", "webp"), ("image/svg+xml", "svg")],
)
def test_extension_from_subtype(ctype, ext):
    assert extension_for_media_type(ctype) == ext


def test_extension_rejects_path_characters():
    with pytest.raises(UnsupportedMediaType):
        extension_for_media_type("image/../png")
