from pathlib import Path

import cv2
import numpy as np
from PIL import Image


def _over_white(rgba: np.ndarray) -> np.ndarray:
    """Composites an RGBA uint8 image onto an opaque white background."""
    alpha = rgba[..., 3:4].astype(np.float64) / 255.0
    rgb = rgba[..., :3].astype(np.float64)
    return np.floor(rgb * alpha + 255.0 * (1.0 - alpha) + 0.5).astype(np.uint8)


def imread_rgb(path: str) -> np.ndarray:
    """
    Reads an image file into a height x width x 3 uint8 RGB array.

    Grayscale is expanded to three channels, 16-bit images are scaled down to
    8 bits and transparency is flattened onto white. Raises FileNotFoundError
    when OpenCV cannot decode the file.
    """
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise FileNotFoundError(path)
    if img.dtype == np.uint16:
        img = (img // 257).astype(np.uint8)

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGB)
    if img.shape[2] == 4:
        return _over_white(cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA))
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def save_png_rgb(path: str, rgb: np.ndarray) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8)).save(
        str(path), format="PNG"
    )
