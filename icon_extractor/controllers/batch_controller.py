"""
Batch Controller for Exe Icon Extractor
Runs the extract-and-save pipeline for every requested location
"""

import logging
import traceback
from pathlib import Path
from typing import Dict, List, Optional

from PIL import Image

from icon_extractor.config.config_manager import OUTPUT_FORMATS
from icon_extractor.controllers.dialog_controller import ask_for_executable
from icon_extractor.services.errors import (
    ConversionFailedError,
    IconExtractorError,
    NoExecutableFoundError,
    PathNotFoundError,
    UserCancelledError,
)
from icon_extractor.services.ico_encoder import write_ico
from icon_extractor.services.icon_source import extract_icon
from icon_extractor.services.path_resolver import ResolvedPath, resolve_path

# Pillow format names for the plain raster outputs
RASTER_FORMATS = {
    "bmp": "BMP",
    "png": "PNG",
    "jpg": "JPEG"
}


class BatchController:
    """Extracts icons for a list of locations, one at a time."""

    def __init__(self, config, extractor=extract_icon, resolver=resolve_path, picker=ask_for_executable):
        """Initialize with configuration and the collaborators to use."""
        self.config = config
        self.extraction = config.get("EXTRACTION", {})
        self.extractor = extractor
        self.resolver = resolver
        self.picker = picker

    def collect_paths(self, paths: Optional[List[str]]) -> List[Path]:
        """Return the given paths, or ask the user for one if there are none."""
        if paths:
            return [Path(p) for p in paths]

        selected = self.picker()
        if selected is None:
            raise UserCancelledError()
        return [Path(selected)]

    def output_path(self, executable: Path, fmt: str) -> Path:
        basename = self.extraction.get("output_basename") or "icon"
        return executable.parent / f"{basename}.{fmt}"

    def save_image(self, image: Optional[Image.Image], output_path: Path, fmt: str) -> Path:
        """Write the icon image in the requested format."""
        if image is None or image.width == 0 or image.height == 0:
            raise ConversionFailedError("no usable icon image")

        if fmt == "ico":
            if not write_ico(image, output_path):
                raise ConversionFailedError(f"could not write {output_path}")
            return output_path

        if fmt == "jpg":
            # JPEG has no alpha channel
            background = Image.new("RGB", image.size, tuple(self.extraction.get("jpg_background", [255, 255, 255])))
            background.paste(image, mask=image.getchannel("A") if "A" in image.getbands() else None)
            image = background

        try:
            save_args = {"quality": self.extraction.get("jpg_quality", 95)} if fmt == "jpg" else {}
            image.save(output_path, format=RASTER_FORMATS[fmt], **save_args)
        except (OSError, ValueError) as e:
            raise ConversionFailedError(f"could not write {output_path}: {e}") from e

        logging.info(f"Wrote {output_path} ({image.width}x{image.height})")
        return output_path

    def process_path(self, path: Path, fmt: str, index: int, prefer_large: bool) -> Path:
        """Resolve one location, extract its icon and save it; returns the output file."""
        resolved = self.resolver(path)
        if resolved.kind == ResolvedPath.NOT_EXIST:
            raise PathNotFoundError(path)
        if resolved.kind == ResolvedPath.NO_MATCH:
            raise NoExecutableFoundError(path)

        executable = resolved.executable
        logging.info(f"Extracting icon #{index} from {executable}")
        image = self.extractor(executable, index, prefer_large)
        return self.save_image(image, self.output_path(executable, fmt), fmt)

    def run(self, paths: Optional[List[str]], fmt: Optional[str] = None, index: Optional[int] = None,
            prefer_large: Optional[bool] = None) -> Dict[str, int]:
        """
        Process every location, continuing past failed ones.

        Args:
            paths: Directories or executables; empty to use the file picker
            fmt: One of ico, bmp, png, jpg (configured default if None)
            index: Icon resource index (configured default if None)
            prefer_large: Large variant instead of small (configured default if None)

        Returns:
            Counts of succeeded and failed items

        Raises:
            UserCancelledError: If no paths were given and the picker was dismissed
        """
        fmt = (fmt or self.extraction.get("default_format", "ico")).lower()
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format: {fmt}")
        if index is None:
            index = self.extraction.get("default_index", 0)
        if prefer_large is None:
            prefer_large = self.extraction.get("prefer_large", False)

        stats = {"succeeded": 0, "failed": 0}
        for path in self.collect_paths(paths):
            try:
                self.process_path(path, fmt, index, prefer_large)
                stats["succeeded"] += 1
            except IconExtractorError as e:
                stats["failed"] += 1
                logging.error(f"Error processing {path}: {e}")
                logging.debug(traceback.format_exc())
            except Exception as e:
                stats["failed"] += 1
                logging.error(f"Error processing {path}: {e}")
                logging.error(traceback.format_exc())

        logging.info(f"Done: {stats['succeeded']} succeeded, {stats['failed']} failed")
        return stats
