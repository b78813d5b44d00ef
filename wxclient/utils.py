import base64
import mimetypes
import os
from typing import List, Tuple, Union
from .types import Image, Text


def encode_image(image: Image) -> Tuple[str, str]:
    """
    Returns (media_type, base64_data).
    Resolves path -> base64 or returns existing base64/url.
    """
    if image.base64_data:
        return image.media_type, image.base64_data

    if image.url:
        # URLs are passed through to the service as-is
        return image.media_type, ""

    if image.path:
        if not os.path.exists(image.path):
            raise FileNotFoundError(f"Image not found: {image.path}")

        mime_type, _ = mimetypes.guess_type(image.path)
        media_type = mime_type or "image/jpeg"

        with open(image.path, "rb") as f:
            return media_type, base64.b64encode(f.read()).decode("utf-8")

    raise ValueError("Image must have path, url, or base64_data")


def image_url(image: Image) -> str:
    """URL for an image part: the remote URL, or a data URI for local/base64 images."""
    if image.url:
        return image.url
    media_type, b64 = encode_image(image)
    return f"data:{media_type};base64,{b64}"


def strip_images(content: Union[str, List[Union[str, Text, Image]]]) -> str:
    """Drop image parts, joining the remaining text parts with newlines."""
    if isinstance(content, str):
        return content
    texts = []
    for part in content:
        if isinstance(part, str):
            texts.append(part)
        elif isinstance(part, Text):
            texts.append(part.text)
    return "\n".join(texts)
