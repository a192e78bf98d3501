# Render an encoded image as C source for the firmware to compile in.

import re
import typing

DEFAULT_PREFIX = 'REPLACE_ME'

_BYTES_PER_LINE = 12
_IDENTIFIER_REGEX = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')

def check_prefix(prefix: str) -> str:
    if not _IDENTIFIER_REGEX.fullmatch(prefix):
        raise ValueError(f'"{prefix}" is not a usable C identifier')
    return prefix

def hex_lines(data: bytes) -> typing.List[str]:
    lines: typing.List[str] = []
    for start in range(0, len(data), _BYTES_PER_LINE):
        chunk = data[start:start + _BYTES_PER_LINE]
        lines.append(', '.join(f'0x{byte:02x}' for byte in chunk))
    return lines

def format_image(prefix: str, width: int, height: int, data: bytes) -> str:
    """Emit the data array and the Image struct pointing at it."""
    check_prefix(prefix)
    out = [f'const uint8_t {prefix}_data[{len(data)}] =', '{']
    if data:
        out.append(',\n'.join(f'    {line}' for line in hex_lines(data)))
    out.append('};')
    out.append(f'static const Image {prefix}_image ='
               f' {{{width}, {height}, {len(data)}, {prefix}_data}};')
    return '\n'.join(out) + '\n'
