"""
Icon Source for Exe Icon Extractor
Pulls an embedded icon out of a Windows executable as a Pillow image
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List, Tuple

from PIL import Image

from icon_extractor.services.errors import ConversionFailedError


def count_icons(exe_path: Path) -> int:
    """Return how many icons an executable carries."""
    import win32gui

    return int(win32gui.ExtractIconEx(str(exe_path), -1))


@contextmanager
def icon_handles(exe_path: Path, index: int):
    """
    Yield the (large, small) icon handle lists for one resource index.

    Every returned handle is destroyed on exit, used or not.
    """
    import win32gui

    large, small = win32gui.ExtractIconEx(str(exe_path), index, 1)
    try:
        yield list(large), list(small)
    finally:
        for hicon in list(large) + list(small):
            try:
                win32gui.DestroyIcon(hicon)
            except Exception as e:
                logging.warning(f"Could not release icon handle: {e}")


def select_handle(large: List, small: List, prefer_large: bool):
    """Pick the preferred variant, falling back to the other one."""
    preferred, other = (large, small) if prefer_large else (small, large)
    if preferred:
        return preferred[0]
    if other:
        logging.warning(f"No {'large' if prefer_large else 'small'} icon variant, "
                        f"using the {'small' if prefer_large else 'large'} one")
        return other[0]
    return None


def mask_to_alpha(mask_bits: bytes, width: int, height: int) -> Image.Image:
    """
    Build an alpha channel from a 1bpp AND mask.

    Mask rows are padded to 16 bits; a set bit marks a transparent pixel.
    """
    stride = ((width + 15) // 16) * 2
    mask = Image.frombuffer('1', (width, height), mask_bits[:stride * height], 'raw', '1;I', stride, 1)
    return mask.convert('L')


def _icon_size(icon_info) -> Tuple[int, int]:
    import win32gui

    _, _, _, hbm_mask, hbm_color = icon_info
    if hbm_color:
        bitmap = win32gui.GetObject(hbm_color)
        return bitmap.bmWidth, bitmap.bmHeight
    # Monochrome icons stack the AND and XOR masks in one bitmap
    bitmap = win32gui.GetObject(hbm_mask)
    return bitmap.bmWidth, bitmap.bmHeight // 2


def _release_icon_bitmaps(icon_info):
    """Delete the mask and color bitmaps GetIconInfo hands to the caller."""
    import win32gui

    _, _, _, hbm_mask, hbm_color = icon_info
    for hbm in (hbm_mask, hbm_color):
        if hbm:
            try:
                win32gui.DeleteObject(hbm)
            except Exception as e:
                logging.warning(f"Could not release icon bitmap: {e}")


def _render_icon(hicon, width: int, height: int) -> bytes:
    """Draw an icon onto a screen-compatible bitmap and return its BGRA bits."""
    import win32con
    import win32gui
    import win32ui

    hdc_screen = win32gui.GetDC(0)
    screen_dc = win32ui.CreateDCFromHandle(hdc_screen)
    memory_dc = screen_dc.CreateCompatibleDC()
    bitmap = win32ui.CreateBitmap()
    try:
        bitmap.CreateCompatibleBitmap(screen_dc, width, height)
        old_bitmap = memory_dc.SelectObject(bitmap)
        try:
            win32gui.DrawIconEx(memory_dc.GetSafeHdc(), 0, 0, hicon, width, height,
                                0, None, win32con.DI_NORMAL)
        finally:
            memory_dc.SelectObject(old_bitmap)
        return bitmap.GetBitmapBits(True)
    finally:
        memory_dc.DeleteDC()
        win32gui.ReleaseDC(0, hdc_screen)
        win32gui.DeleteObject(bitmap.GetHandle())


def handle_to_image(hicon) -> Image.Image:
    """Render an icon handle into an RGBA image."""
    import win32gui
    import win32ui

    icon_info = win32gui.GetIconInfo(hicon)
    try:
        width, height = _icon_size(icon_info)
        if width == 0 or height == 0:
            raise ConversionFailedError("icon has zero size")

        bits = _render_icon(hicon, width, height)
        image = Image.frombuffer('RGBA', (width, height), bits, 'raw', 'BGRA', 0, 1).copy()

        # Icons without a real alpha channel carry transparency in the AND mask
        if image.getchannel('A').getextrema() == (0, 0):
            mask_bits = win32ui.CreateBitmapFromHandle(icon_info[3]).GetBitmapBits(True)
            image.putalpha(mask_to_alpha(mask_bits, width, height))
    finally:
        _release_icon_bitmaps(icon_info)

    return image


def extract_icon(exe_path: Path, index: int = 0, prefer_large: bool = False) -> Image.Image:
    """
    Extract one icon from an executable.

    Args:
        exe_path: Executable (or DLL) holding the icon resources
        index: Zero-based icon resource index
        prefer_large: Use the large variant rather than the small one

    Returns:
        The selected icon as an RGBA image

    Raises:
        ConversionFailedError: If the index is out of range or no handle is usable
    """
    total = count_icons(exe_path)
    if index < 0 or index >= total:
        raise ConversionFailedError(f"icon index {index} out of range ({total} icons in {exe_path.name})")

    with icon_handles(exe_path, index) as (large, small):
        hicon = select_handle(large, small, prefer_large)
        if hicon is None:
            raise ConversionFailedError(f"no icon at index {index} in {exe_path.name}")
        image = handle_to_image(hicon)

    logging.debug(f"Extracted {image.width}x{image.height} icon #{index} from {exe_path}")
    return image
