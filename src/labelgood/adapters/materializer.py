"""Write label content to a freshly created renderer input file."""

from __future__ import annotations

import base64
import binascii
from io import BytesIO
import logging
from pathlib import Path
import tempfile

from PIL import Image, UnidentifiedImageError

from labelgood.core.exceptions import LabelValidationError
from labelgood.core.models import LabelContent, Markup, Raster


logger = logging.getLogger(__name__)

MARKUP_SUFFIX = ".html"
_INPUT_PREFIX = "labelgood_"
_SUPPORTED_ENCODINGS = frozenset({"base64"})
_FORMAT_SUFFIXES: dict[str, str] = {
    "PNG": ".png",
    "JPEG": ".jpg",
    "GIF": ".gif",
    "BMP": ".bmp",
    "WEBP": ".webp",
    "TIFF": ".tiff",
}


def strip_data_uri(payload: str) -> str:
    """Remove a ``data:<mime>;base64,`` prefix when present."""
    text = payload.strip()
    if text[:5].lower() != "data:":
        return text
    header, separator, body = text.partition(",")
    if not separator:
        raise LabelValidationError("Malformed data URI: missing ',' after the header.")
    if ";base64" not in header.lower():
        raise LabelValidationError("Only base64 encoded data URIs are supported.")
    return body


def decode_raster(payload: str) -> bytes:
    """Decode a base64 image payload, with or without a data URI prefix."""
    body = "".join(strip_data_uri(payload).split())
    if not body:
        raise LabelValidationError("Image payload is empty.")
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise LabelValidationError(f"Failed to decode base64 image: {exc}") from exc


def detect_image_suffix(data: bytes) -> str:
    """Return the file suffix matching the image format, validating the bytes."""
    try:
        with Image.open(BytesIO(data)) as image:
            image_format = (image.format or "").upper()
            image.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
        raise LabelValidationError(f"Decoded payload is not a supported image: {exc}") from exc
    except (OSError, SyntaxError, ValueError) as exc:
        raise LabelValidationError(f"Decoded image is corrupt: {exc}") from exc
    if not image_format:
        raise LabelValidationError("Unable to determine the image format.")
    return _FORMAT_SUFFIXES.get(image_format, f".{image_format.lower()}")


def is_encoded_image(payload: str) -> bool:
    """Return True when ``payload`` is strict base64 for bytes Pillow recognises."""
    try:
        detect_image_suffix(decode_raster(payload))
    except LabelValidationError:
        return False
    return True


def _write_temporary(data: bytes, *, suffix: str, directory: Path | None) -> Path:
    if directory is not None:
        directory.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="wb",
        prefix=_INPUT_PREFIX,
        suffix=suffix,
        dir=directory,
        delete=False,
    ) as handle:
        handle.write(data)
    return Path(handle.name)


def materialize(content: LabelContent, *, directory: Path | None = None) -> Path:
    """Write ``content`` to a new temporary file and return its path.

    Raster payloads are fully decoded and validated before anything touches
    the filesystem, so a bad payload leaves no file behind.
    """
    match content:
        case Markup(text=text):
            path = _write_temporary(text.encode("utf-8"), suffix=MARKUP_SUFFIX, directory=directory)
        case Raster(data=data, source_encoding=encoding):
            if encoding.lower() not in _SUPPORTED_ENCODINGS:
                raise LabelValidationError(f"Unsupported raster encoding '{encoding}'.")
            decoded = decode_raster(data)
            suffix = detect_image_suffix(decoded)
            path = _write_temporary(decoded, suffix=suffix, directory=directory)
        case _:
            raise LabelValidationError(f"Unsupported label content: {content!r}")

    logger.debug("Materialised %s input at %s", type(content).__name__.lower(), path)
    return path


def discard(path: Path | None) -> None:
    """Remove a materialised input file, ignoring files already gone."""
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Unable to remove temporary input %s: %s", path, exc)


__all__ = [
    "MARKUP_SUFFIX",
    "decode_raster",
    "detect_image_suffix",
    "discard",
    "is_encoded_image",
    "materialize",
    "strip_data_uri",
]
