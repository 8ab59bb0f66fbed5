"""
Shared fixtures for the Exe Icon Extractor tests
"""

import copy

import pytest
from PIL import Image, ImageDraw

from icon_extractor.config.config_manager import DEFAULT_CONFIG


@pytest.fixture
def source_image():
    """A 32x32 icon-like image with a transparent border."""
    image = Image.new('RGBA', (32, 32), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    draw.ellipse((4, 4, 27, 27), fill=(200, 40, 40, 255))
    draw.rectangle((12, 12, 19, 19), fill=(255, 255, 255, 128))
    return image


@pytest.fixture
def config():
    config = copy.deepcopy(DEFAULT_CONFIG)
    config["LOGGING"]["log_to_file"] = False
    config["SKIP_DEPENDENCIES"] = True
    return config


@pytest.fixture
def app_dir(tmp_path):
    """A directory laid out like an installed application."""
    directory = tmp_path / "MyApp"
    directory.mkdir()
    (directory / "MyApp.exe").write_bytes(b"MZ")
    (directory / "readme.txt").write_text("hello")
    return directory
