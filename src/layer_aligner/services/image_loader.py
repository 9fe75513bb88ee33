"""
Layer Aligner - Image Import Service

Import-side collaborator of the layer store:
- Filters dropped/selected files to the accepted media types
- Reads intrinsic image sizes with Pillow (header only, no pixel decoding)
"""

import logging
import os
from typing import Iterable, List, Tuple

from PIL import Image

from layer_aligner.constants import ACCEPTED_IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)


def is_supported_image(path) -> bool:
    """True when the file extension is one of the accepted media types"""
    ext = os.path.splitext(str(path))[1].lower().lstrip('.')
    return ext in ACCEPTED_IMAGE_EXTENSIONS


def filter_supported(paths: Iterable) -> List[str]:
    """Keep only accepted image files, preserving order

    Args:
        paths: Candidate file paths (str or os.PathLike)

    Returns:
        Accepted paths as strings
    """
    accepted = []
    for path in paths:
        if is_supported_image(path):
            accepted.append(str(path))
        else:
            logger.debug(f"Skipping unsupported file: {path}")
    return accepted


def read_image_size(path) -> Tuple[int, int]:
    """Intrinsic (width, height) of an image file

    Raises:
        FileNotFoundError: The file does not exist
        PIL.UnidentifiedImageError: The file is not a readable image
    """
    with Image.open(path) as image:
        width, height = image.size
    logger.debug(f"Decoded {os.path.basename(str(path))}: {width}x{height}")
    return width, height
