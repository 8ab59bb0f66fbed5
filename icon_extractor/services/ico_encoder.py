"""
ICO Encoder for Exe Icon Extractor
Packs one source bitmap into a multi-resolution ICO container
"""

import io
import os
import struct
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image

from icon_extractor.services.errors import ConversionFailedError

# Largest first, matching what icon consumers expect
ICO_SIZES = [256, 48, 32, 16]

# ICONDIR: reserved, type, count
HEADER_FORMAT = '<HHH'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

# ICONDIRENTRY: width, height, colors, reserved, planes, bpp, size, offset
ENTRY_FORMAT = '<BBBBHHII'
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)

ICON_TYPE = 1
BITS_PER_PIXEL = 32


class IconEntry:
    """One directory record of an ICO container."""

    def __init__(self, width: int, height: int, payload_size: int, payload_offset: int,
                 color_count: int = 0, reserved: int = 0, color_planes: int = 0,
                 bits_per_pixel: int = BITS_PER_PIXEL):
        self.width = width
        self.height = height
        self.payload_size = payload_size
        self.payload_offset = payload_offset
        self.color_count = color_count
        self.reserved = reserved
        self.color_planes = color_planes
        self.bits_per_pixel = bits_per_pixel

    def pack(self) -> bytes:
        # 256 does not fit a byte; the format stores it as 0
        return struct.pack(
            ENTRY_FORMAT,
            self.width & 0xFF,
            self.height & 0xFF,
            self.color_count,
            self.reserved,
            self.color_planes,
            self.bits_per_pixel,
            self.payload_size,
            self.payload_offset
        )

    @classmethod
    def unpack(cls, data: bytes) -> 'IconEntry':
        width, height, colors, reserved, planes, bpp, size, offset = struct.unpack(ENTRY_FORMAT, data)
        return cls(
            width or 256,
            height or 256,
            size,
            offset,
            color_count=colors,
            reserved=reserved,
            color_planes=planes,
            bits_per_pixel=bpp
        )

    def __repr__(self):
        return (f"IconEntry({self.width}x{self.height}, {self.bits_per_pixel}bpp, "
                f"size={self.payload_size}, offset={self.payload_offset})")


def resample(image: Image.Image, size: int) -> Image.Image:
    """Resize an image to a size x size square with bicubic filtering."""
    if image.mode != 'RGBA':
        image = image.convert('RGBA')
    return image.resize((size, size), Image.Resampling.BICUBIC)


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as a standalone PNG stream."""
    buffer = io.BytesIO()
    image.save(buffer, format='PNG', optimize=True)
    return buffer.getvalue()


def encode_ico(image: Optional[Image.Image], sizes: Sequence[int] = ICO_SIZES) -> bytes:
    """
    Build an ICO byte stream holding one PNG payload per target size.

    Args:
        image: Source bitmap, any Pillow mode
        sizes: Square target sizes, in the order they are written

    Returns:
        The complete ICO container

    Raises:
        ConversionFailedError: If the image is missing or any rendition is empty
    """
    if image is None:
        raise ConversionFailedError("no source image")
    if image.width == 0 or image.height == 0:
        raise ConversionFailedError("source image has zero size")

    payloads = []
    for size in sizes:
        resized = resample(image, size)
        if resized.width == 0 or resized.height == 0:
            raise ConversionFailedError(f"{size}x{size} rendition has zero size")
        payloads.append(encode_png(resized))
        logging.debug(f"Encoded {size}x{size} rendition ({len(payloads[-1])} bytes)")

    header = struct.pack(HEADER_FORMAT, 0, ICON_TYPE, len(sizes))

    directory = []
    offset = HEADER_SIZE + ENTRY_SIZE * len(sizes)
    for size, payload in zip(sizes, payloads):
        directory.append(IconEntry(size, size, len(payload), offset).pack())
        offset += len(payload)

    return header + b''.join(directory) + b''.join(payloads)


def read_ico_directory(data: bytes) -> List[IconEntry]:
    """Parse the header and directory records of an ICO stream."""
    if len(data) < HEADER_SIZE:
        raise ValueError("Data too short for an ICO header")

    reserved, image_type, count = struct.unpack(HEADER_FORMAT, data[:HEADER_SIZE])
    if reserved != 0 or image_type != ICON_TYPE:
        raise ValueError(f"Not an icon container (reserved={reserved}, type={image_type})")
    if len(data) < HEADER_SIZE + ENTRY_SIZE * count:
        raise ValueError("Data too short for the ICO directory")

    entries = []
    for i in range(count):
        start = HEADER_SIZE + ENTRY_SIZE * i
        entries.append(IconEntry.unpack(data[start:start + ENTRY_SIZE]))
    return entries


def write_ico(image: Optional[Image.Image], output_path: Path, sizes: Sequence[int] = ICO_SIZES) -> bool:
    """Encode an image and write it as an ICO file; False on any failure."""
    output_path = Path(output_path)
    try:
        data = encode_ico(image, sizes)
    except ConversionFailedError as e:
        logging.error(f"Error creating icon {output_path}: {e}")
        return False

    # Write beside the target first so a failed write never leaves a corrupt icon
    temp_path = output_path.with_name(output_path.name + '.tmp')
    try:
        with open(temp_path, 'wb') as f:
            f.write(data)
        os.replace(temp_path, output_path)
    except OSError as e:
        logging.error(f"Failed to create icon file {output_path}: {e}")
        return False
    finally:
        # Also reached on interrupts; after a successful replace the file is gone
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError as cleanup_error:
                logging.warning(f"Failed to clean up {temp_path}: {cleanup_error}")

    entries = read_ico_directory(data)
    logging.info(f"Wrote {output_path} ({len(data)} bytes, "
                 f"{', '.join(f'{e.width}x{e.height}' for e in entries)})")
    return True
