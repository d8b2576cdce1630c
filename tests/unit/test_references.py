import pytest

from mcp_vision import ReferenceKind, UnsupportedReferenceKind, classify
from mcp_vision.references import parse_data_uri


@pytest.mark.parametrize(
    "ref,kind",
    [
        ("https://x/y.png", ReferenceKind.REMOTE_URL),
        ("HTTP://example.com/a.jpg", ReferenceKind.REMOTE_URL),
        ("file:///tmp/a.jpg", ReferenceKind.FILE_URI),
        ("/tmp/a.jpg", ReferenceKind.ABSOLUTE_PATH),
        ("C:\\Users\\me\\shot.png", ReferenceKind.ABSOLUTE_PATH),
        ("data:image/png;base64,AAAA", ReferenceKind.DATA_URI),
    ],
)
def test_classify(ref, kind):
    assert classify(ref) is kind


@pytest.mark.parametrize("ref", ["ftp://x", "relative/path.png", "data:text/plain;base64,AAAA", ""])
def test_classify_rejects_unsupported(ref):
    with pytest.raises(UnsupportedReferenceKind):
        classify(ref)


def test_parse_data_uri_splits_mime_and_payload():
    assert parse_data_uri("data:image/webp;base64,QUJD") == ("image/webp", "QUJD")


def test_parse_data_uri_rejects_garbage():
    with pytest.raises(UnsupportedReferenceKind):
        parse_data_uri("data:image/png,notbase64")
