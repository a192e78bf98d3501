# Read grayscale pixel maps for the RLE encoder.
#
# The usual input is a plain-text PGM as exported by GIMP:
#   P2
#   # Created by GIMP version 2.10.30 PNM plug-in
#   128 32
#   255
#   0
#   0
#   ...
# ...but a bare grid of numbers, one image row per line, is accepted too.
# Anything else Pillow can open is converted to grayscale.

import logging
import typing
from PIL import Image

_PIL_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.bmp', '.gif')

class MalformedInput(ValueError):
    """The pixel map could not be parsed."""

class PixMap(typing.NamedTuple):
    width: int
    height: int
    samples: typing.List[int]
    maxval: int = 255

def _parse_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MalformedInput(f"{what} {token!r} is not a number") from None

def _parse_header(lines: typing.List[str]) -> typing.Tuple[int, int, int]:
    if len(lines) < 4:
        raise MalformedInput("Header is cut short")
    size = lines[2].split()
    if len(size) != 2:
        raise MalformedInput(f"Expected 'width height', got {lines[2]!r}")
    width = _parse_int(size[0], "Width")
    height = _parse_int(size[1], "Height")
    maxval = _parse_int(lines[3].strip(), "Maximum value")
    if not 1 <= maxval <= 255:
        raise MalformedInput(f"Maximum value {maxval} does not fit in a byte")
    return (width, height, maxval)

def parse_pixmap(text: str) -> PixMap:
    lines = text.split('\n')
    # Skip blank lines before the content; the header check wants the first
    # line that has something on it.
    while lines and not lines[0].split():
        lines = lines[1:]
    if not lines:
        raise MalformedInput("No pixel data")

    maxval = 255
    if len(lines[0].split()) == 1:
        # Most likely an export with a header; width and height are line 3.
        logging.debug(f"Header detected, format {lines[0].strip()!r}")
        width, height, maxval = _parse_header(lines)
        lines = lines[4:]
    else:
        width = len(lines[0].split())
        rows = [line for line in lines if line.strip()]
        height = len(rows)
        for number, row in enumerate(rows, start=1):
            if len(row.split()) != width:
                raise MalformedInput(
                    f"Row {number} has {len(row.split())} samples,"
                    f" expected {width}")

    samples: typing.List[int] = []
    for line in lines:
        # Blank lines (including the trailing one) fall out of split().
        for token in line.split():
            sample = _parse_int(token, "Sample")
            if not 0 <= sample <= maxval:
                raise MalformedInput(
                    f"Sample {sample} is outside 0..{maxval}")
            samples.append(sample)

    if width <= 0 or height <= 0:
        raise MalformedInput(f"Image size {width}x{height} is empty")
    if len(samples) != width * height:
        raise MalformedInput(
            f"Found {len(samples)} samples for a {width}x{height} image")
    return PixMap(width, height, samples, maxval)

def load_image(path: str) -> PixMap:
    """Load any image Pillow can read as 8-bit grayscale."""
    with Image.open(path) as im:
        if im.mode != 'L':
            logging.info(f"Converting {im.mode} image to grayscale")
            gray = im.convert('L')
        else:
            gray = im.copy()
    samples = list(gray.tobytes())
    pixmap = PixMap(gray.width, gray.height, samples)
    gray.close()
    return pixmap

def _is_binary_netpbm(path: str) -> bool:
    # P1-P3 are plain text, P4-P7 are the raw variants Pillow reads.
    with open(path, 'rb') as pixfile:
        magic = pixfile.read(2)
    return len(magic) == 2 and magic[0:1] == b'P' and magic[1:2] in b'4567'

def read_pixmap(path: str) -> PixMap:
    if path.lower().endswith(_PIL_EXTENSIONS) or _is_binary_netpbm(path):
        return load_image(path)
    with open(path) as pixfile:
        return parse_pixmap(pixfile.read())
