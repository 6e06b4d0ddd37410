"""Thumbnail derivation with Pillow."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from PIL import Image, ImageOps

from ..core.errors import FilesystemError, ImageError, raise_walk_error
from ..core.layout import IMAGE_SUFFIXES, THUMB_DIR_NAME
from ..core.models import ResampleFilter, ThumbnailMethod, ThumbnailSpec

logger = logging.getLogger(__name__)

_RESAMPLE = {
    ResampleFilter.NEAREST: Image.Resampling.NEAREST,
    ResampleFilter.BOX: Image.Resampling.BOX,
    ResampleFilter.BILINEAR: Image.Resampling.BILINEAR,
    ResampleFilter.HAMMING: Image.Resampling.HAMMING,
    ResampleFilter.BICUBIC: Image.Resampling.BICUBIC,
    ResampleFilter.LANCZOS: Image.Resampling.LANCZOS,
}

_JPEG_SUFFIXES = {".jpg", ".jpeg"}
_JPEG_MODES = {"RGB", "L", "CMYK"}


def scale_image(image: Image.Image, spec: ThumbnailSpec) -> Image.Image:
    """Apply the sizing strategy of ``spec`` to an image.

    Args:
        image: Decoded source image
        spec: Sizing strategy and target box

    Returns:
        New image; the source is left untouched
    """
    size = (spec.width, spec.height)
    resample = _RESAMPLE[spec.filter]

    if spec.method is ThumbnailMethod.RESIZE:
        return image.resize(size, resample)

    if spec.method is ThumbnailMethod.FIT:
        # Never upscale
        if image.width <= spec.width and image.height <= spec.height:
            return image.copy()
        return ImageOps.contain(image, size, method=resample)

    # fill and thumbnail: scale to cover, then centre crop
    return ImageOps.fit(image, size, method=resample, centering=(0.5, 0.5))


def make_thumbnail(source: Path, destination: Path, spec: ThumbnailSpec) -> Path:
    """Decode ``source``, scale it and write the result to ``destination``.

    Args:
        source: Source image path
        destination: Output image path; parents are created
        spec: Sizing strategy

    Returns:
        Destination path
    """
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            f"Error creating thumbnail directory {destination.parent}: {exc}"
        ) from exc

    try:
        with Image.open(source) as image:
            thumb = scale_image(image, spec)
        if destination.suffix.lower() in _JPEG_SUFFIXES and thumb.mode not in _JPEG_MODES:
            thumb = thumb.convert("RGB")
        thumb.save(destination)
    except (OSError, ValueError) as exc:
        raise ImageError(f"Error creating thumbnail {destination} from {source}: {exc}") from exc

    logger.debug(f"Thumbnail {source} → {destination} ({spec.method.value})")
    return destination


def generate_thumbnails(
    image_root: Path, output_root: Path, spec: ThumbnailSpec
) -> list[Path]:
    """Create a derivative for every image under ``image_root``.

    Each derivative lands in a hidden ``.thumbs`` directory beside the
    mirrored location of its source under ``output_root``.

    Args:
        image_root: Directory to scan recursively
        output_root: Mirror of ``image_root`` in the output tree
        spec: Sizing strategy applied to every image

    Returns:
        Paths of the written derivatives
    """
    if not image_root.is_dir():
        raise FilesystemError(f"Thumbnail source directory not found: {image_root}")

    written: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(image_root, onerror=raise_walk_error):
        dirnames[:] = [name for name in dirnames if name != THUMB_DIR_NAME]
        current = Path(dirpath)
        relative = current.relative_to(image_root)
        for name in filenames:
            if Path(name).suffix.lower() not in IMAGE_SUFFIXES:
                continue
            destination = output_root / relative / THUMB_DIR_NAME / name
            written.append(make_thumbnail(current / name, destination, spec))

    return written
