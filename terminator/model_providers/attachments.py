"""Attachment encoding.

Turns local file references into what providers accept: inline base64
images, or plain text folded into the prompt. Everything here is best
effort. A file that is too large, unreadable or of the wrong kind is
simply left out; no function in this module raises for a bad file.
"""

from __future__ import annotations

import base64
import logging
import os
from typing import Iterable, Optional, Sequence

from terminator.model_providers.config import AttachmentRef, ImageAttachment

logger = logging.getLogger(__name__)


IMAGE_MAX_BYTES = 8_000_000
TEXT_MAX_BYTES = 200_000
TEXT_MAX_CHARS = 4000

IMAGE_MIME_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "gif": "image/gif",
    "heic": "image/heic",
    "heif": "image/heif",
}


def mime_type_for(path: os.PathLike | str) -> Optional[str]:
    """Image mime type for a file extension, or None if not an image."""
    ext = os.path.splitext(os.fspath(path))[1].lstrip(".").lower()
    return IMAGE_MIME_TYPES.get(ext)


def _file_size(ref: AttachmentRef) -> Optional[int]:
    try:
        return ref.path.stat().st_size
    except OSError:
        return None


def encode_image(ref: AttachmentRef, max_bytes: int = IMAGE_MAX_BYTES) -> Optional[ImageAttachment]:
    """Base64-encode one image attachment, or None if it must be skipped."""
    mime = mime_type_for(ref.path)
    if mime is None:
        return None
    size = _file_size(ref)
    if size is None or size > max_bytes:
        logger.debug(f"Skipping image {ref.name}: size={size}")
        return None
    try:
        data = ref.path.read_bytes()
    except OSError as e:
        logger.debug(f"Skipping unreadable image {ref.name}: {e}")
        return None
    # The file may have grown between stat() and read.
    if len(data) > max_bytes:
        return None
    return ImageAttachment(mime_type=mime, base64=base64.b64encode(data).decode("ascii"))


def encode_images(refs: Iterable[AttachmentRef], max_bytes: int = IMAGE_MAX_BYTES) -> list[ImageAttachment]:
    """Encode every attachment that is a known image within the size ceiling."""
    images = []
    for ref in refs:
        image = encode_image(ref, max_bytes)
        if image is not None:
            images.append(image)
    return images


def read_text_attachment(
    ref: AttachmentRef,
    max_bytes: int = TEXT_MAX_BYTES,
    max_chars: int = TEXT_MAX_CHARS,
) -> Optional[str]:
    """Return ``"File: <name>\\n<text>"`` for a small UTF-8 file, else None."""
    size = _file_size(ref)
    if size is None or size > max_bytes:
        return None
    try:
        text = ref.path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    return f"File: {ref.name}\n{trimmed[:max_chars]}"


def extract_text(refs: Iterable[AttachmentRef]) -> str:
    """Concatenate the text blocks of all non-image attachments."""
    blocks = []
    for ref in refs:
        if mime_type_for(ref.path) is not None:
            continue
        block = read_text_attachment(ref)
        if block is not None:
            blocks.append(block)
    return "\n\n".join(blocks)


def compose_prompt(draft: str, refs: Sequence[AttachmentRef]) -> str:
    """Build the outgoing message text from the user's draft and attachments.

    The draft is followed by a list of attached file names and, when any
    text could be extracted, an ``Extracted text:`` section. Without
    attachments the draft is returned unchanged.
    """
    if not refs:
        return draft

    header = "\n\nAttached files:\n" + "\n".join(f"- {ref.name}" for ref in refs)
    extracted = extract_text(refs)
    if not extracted:
        return draft + header
    return draft + header + "\n\nExtracted text:\n" + extracted


def dedupe_attachments(refs: Iterable[AttachmentRef]) -> list[AttachmentRef]:
    """Drop attachments pointing at an already-listed file, keeping order."""
    seen: set[str] = set()
    unique = []
    for ref in refs:
        key = os.path.normpath(os.path.abspath(ref.path))
        if key in seen:
            continue
        seen.add(key)
        unique.append(ref)
    return unique
