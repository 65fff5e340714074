"""Tests for image ingestion into portfolio blocks."""

import base64

import pytest

from app.core.errors import TooLargeError, UnsupportedTypeError
from app.utils.image_upload import (
    encode_data_uri,
    get_supported_formats,
    ingest_image,
    validate_image,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
MIB = 1024 * 1024


def test_png_embedded_into_src(document):
    block = document.add_block("image")

    data_uri = ingest_image(document, block.id, PNG_BYTES, "image/png")

    assert data_uri.startswith("data:image/png;base64,")
    assert base64.b64decode(data_uri.split(",", 1)[1]) == PNG_BYTES
    assert document.get_block(block.id).content["src"] == data_uri


def test_testimonial_defaults_to_avatar(document):
    block = document.add_block("testimonial")
    data_uri = ingest_image(document, block.id, PNG_BYTES, "image/png")

    content = document.get_block(block.id).content
    assert content["avatar"] == data_uri
    assert "src" not in content


def test_explicit_field_wins(document):
    block = document.add_block("project")
    ingest_image(document, block.id, PNG_BYTES, "image/jpeg", field="cover")
    assert document.get_block(block.id).content["cover"].startswith("data:image/jpeg;base64,")


@pytest.mark.parametrize("mime", ["image/jpeg", "image/png", "image/gif", "image/webp", "image/svg+xml"])
def test_allowed_types(mime):
    assert validate_image(PNG_BYTES, mime) == mime


def test_content_type_parameters_ignored():
    assert validate_image(b"<svg/>", "image/svg+xml; charset=utf-8") == "image/svg+xml"


@pytest.mark.parametrize("mime", ["application/pdf", "image/bmp", "text/plain", "", None])
def test_unsupported_type_rejected(document, mime):
    block = document.add_block("image")
    with pytest.raises(UnsupportedTypeError):
        ingest_image(document, block.id, PNG_BYTES, mime)
    assert document.get_block(block.id).content["src"] == ""


def test_general_ceiling_is_10mb(document):
    block = document.add_block("image")
    assert ingest_image(document, block.id, b"x" * (10 * MIB), "image/png") is not None

    with pytest.raises(TooLargeError) as exc:
        ingest_image(document, block.id, b"x" * (10 * MIB + 1), "image/png")
    assert "10MB" in str(exc.value)


def test_avatar_ceiling_is_5mb(document):
    block = document.add_block("testimonial")
    with pytest.raises(TooLargeError) as exc:
        ingest_image(document, block.id, b"x" * (5 * MIB + 1), "image/png")
    assert exc.value.limit_mb == 5
    assert document.get_block(block.id).content["avatar"] == ""


def test_size_checked_before_type():
    with pytest.raises(TooLargeError):
        validate_image(b"x" * (10 * MIB + 1), "application/pdf")


def test_unknown_block_is_noop(document):
    assert ingest_image(document, "missing", PNG_BYTES, "image/png") is None


def test_encode_data_uri():
    assert encode_data_uri(b"abc", "image/gif") == "data:image/gif;base64,YWJj"


def test_supported_formats():
    formats = get_supported_formats()
    assert formats["max_size_mb"] == 10
    assert formats["max_avatar_size_mb"] == 5
    assert "image/webp" in formats["supported_types"]
