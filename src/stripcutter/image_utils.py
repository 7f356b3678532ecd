"""Image conversion utilities for stripcutter.

Everything works on RGBA uint8 NumPy arrays of shape (H, W, 4). Decoding and
encoding go through OpenCV, which stores color in BGR order.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

import cv2
import numpy as np
from numpy.typing import NDArray


class ImageLoadError(ValueError):
    """Raised when an image file cannot be read or decoded."""


class EncodeError(RuntimeError):
    """Raised when a pixel buffer cannot be encoded."""


def ensure_rgba(img: NDArray) -> NDArray:
    """Return ``img`` as a contiguous RGBA uint8 array.

    Accepts grayscale (H, W), RGB (H, W, 3) or RGBA (H, W, 4) input. Other
    dtypes are clipped to 0..255.
    """
    img = np.asarray(img)
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    if img.ndim == 2:
        img = np.stack([img] * 3, axis=-1)
    if img.ndim != 3 or img.shape[2] not in (3, 4):
        raise ValueError(f"expected an HxW, HxWx3 or HxWx4 image, got shape {img.shape}")
    if img.shape[2] == 3:
        alpha = np.full(img.shape[:2] + (1,), 255, dtype=np.uint8)
        img = np.concatenate([img, alpha], axis=2)
    return np.ascontiguousarray(img)


def decode_image(data: bytes) -> NDArray:
    """Decode an encoded image (PNG/JPEG/WebP...) to RGBA."""
    buf = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(buf, cv2.IMREAD_UNCHANGED) if buf.size else None
    if img is None:
        raise ImageLoadError("could not decode image data")

    # 16-bit PNG/TIFF: keep the high byte
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise ImageLoadError(f"unsupported sample type {img.dtype}")

    if img.ndim == 2:
        return ensure_rgba(img)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)


def load_image(path: Union[str, Path]) -> NDArray:
    """Read an image file and return it as an RGBA array.

    Reads the bytes first so non-ASCII paths work on every platform.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageLoadError(f"{path}: {e}") from e
    try:
        return decode_image(data)
    except ImageLoadError as e:
        raise ImageLoadError(f"{path}: {e}") from e


def _encode_params(ext: str, quality: int) -> List[int]:
    quality = max(0, min(100, int(quality)))
    if ext in (".jpg", ".jpeg"):
        return [cv2.IMWRITE_JPEG_QUALITY, quality]
    if ext == ".webp":
        return [cv2.IMWRITE_WEBP_QUALITY, quality]
    if ext == ".png":
        return [cv2.IMWRITE_PNG_COMPRESSION, 3]
    return []


def encode_image(rgba: NDArray, image_format: str = ".jpg", quality: int = 95) -> bytes:
    """Encode an RGBA array into the container format given by its extension.

    Args:
        rgba: Pixel buffer (H, W, 4)
        image_format: File extension such as ".jpg", ".png" or ".webp"
        quality: Quality factor for lossy formats (0-100)

    Returns:
        Encoded bytes

    Raises:
        EncodeError: if OpenCV rejects the buffer or the format
    """
    ext = image_format.lower()
    if not ext.startswith("."):
        ext = "." + ext

    if rgba.size == 0:
        raise EncodeError("cannot encode an empty image")

    # JPEG has no alpha channel
    if ext in (".jpg", ".jpeg"):
        bgr = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGR)
    else:
        bgr = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)

    try:
        ok, buf = cv2.imencode(ext, bgr, _encode_params(ext, quality))
    except cv2.error as e:
        raise EncodeError(f"{ext}: {e}") from e
    if not ok:
        raise EncodeError(f"{ext}: encoder returned no data")
    return buf.tobytes()


def resize_to_width(rgba: NDArray, width: int, height: int) -> NDArray:
    """Area-averaging resize, used for the fast analysis pass."""
    return cv2.resize(rgba, (width, height), interpolation=cv2.INTER_AREA)
