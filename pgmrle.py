# Signed-count RLE for grayscale images on embedded displays.
# A tiny run-length encoding with a very simple decoder on the device side.
#
# Format:
#   No header; the device is told the byte count, width and height separately.
#   Data is a sequence of records, each starting with a signed control byte:
#     Positive (1..127): the next byte is a pixel repeated that many times.
#     Negative (-1..-128): that many "non-RLE" pixels follow, one byte each.
#     Zero is never written.
#
# The encoder never starts a run on the final pixel. That pixel only makes it
# into the stream if the repeat run before it swallowed it; pass keep_last to
# write it as a one-pixel literal instead.
#
# Copyright 2023 Philip Boulain.
# Licensed under the EUPL-1.2-or-later.

import io
import logging
import typing
from PIL import Image

# The control byte is signed, so these are hard limits of the format.
MAX_REPEAT = 0x7f
MAX_LITERAL = 128

class SampleOutOfRange(ValueError):
    """A sample does not fit in an unsigned byte."""

class RepeatRun(typing.NamedTuple):
    length: int
    value: int

    def control_byte(self) -> int:
        return self.length

    def payload(self) -> bytes:
        return bytes((self.value,))

class LiteralRun(typing.NamedTuple):
    values: typing.Tuple[int, ...]

    def control_byte(self) -> int:
        return -len(self.values)

    def payload(self) -> bytes:
        return bytes(self.values)

Run = typing.Union[RepeatRun, LiteralRun]

def find_runs(samples: typing.Sequence[int], keep_last: bool = False
              ) -> typing.Iterator[Run]:
    """Split samples into repeat and literal runs, greedily, left to right."""
    last = len(samples) - 1
    i = 0
    while i < last:
        # Repeat run: count successors equal to this one.
        matches = 0
        while (i < last and samples[i + 1] == samples[i]
               and matches < MAX_REPEAT - 1):
            matches += 1
            i += 1
        if matches > 0:
            yield RepeatRun(matches + 1, samples[i])
            i += 1
            continue

        # Literal run: everything up to the next pair of equal neighbours.
        # The pixel that stops the scan starts the next run.
        start = i
        while (i < last and samples[i + 1] != samples[i]
               and i - start < MAX_LITERAL):
            i += 1
        yield LiteralRun(tuple(samples[start:i]))

    if keep_last and i == last:
        yield LiteralRun((samples[last],))

def _check_samples(samples: typing.Sequence[int]) -> None:
    for index, sample in enumerate(samples):
        if not 0 <= sample <= 0xff:
            raise SampleOutOfRange(
                f"Sample {sample} at index {index} does not fit in a byte")

def encode(samples: typing.Sequence[int], keep_last: bool = False) -> bytes:
    buf = io.BytesIO()
    writer = io.BufferedWriter(buf)  # Must stay alive until getvalue().
    encode_stream(samples, writer, keep_last)
    writer.flush()
    return buf.getvalue()

def encode_stream(samples: typing.Sequence[int], out: io.BufferedIOBase,
                  keep_last: bool = False) -> int:
    """Write the RLE stream for samples to out, returning the byte count."""
    _check_samples(samples)
    written = 0
    repeats = 0
    literals = 0
    for run in find_runs(samples, keep_last):
        if isinstance(run, RepeatRun):
            repeats += 1
        else:
            literals += 1
        # Two's complement for the negative literal counts.
        out.write((run.control_byte() & 0xff).to_bytes(
            length=1, byteorder='little'))
        payload = run.payload()
        out.write(payload)
        written += 1 + len(payload)
    logging.debug(
        f"Encoded {len(samples)} samples as {repeats} repeat and"
        f" {literals} literal runs, {written} bytes")
    return written

def decode(data: typing.Union[bytes, bytearray, memoryview]) -> typing.List[int]:
    return decode_stream(io.BufferedReader(io.BytesIO(data)))

def decode_stream(stream: io.BufferedIOBase) -> typing.List[int]:
    samples: typing.List[int] = []
    while True:
        control = stream.read(1)
        if len(control) == 0:
            return samples
        count = int.from_bytes(control, byteorder='little', signed=True)
        if count == 0:
            raise ValueError("Zero control byte")
        elif count > 0:
            value = stream.read(1)
            if len(value) != 1:
                raise ValueError("File truncated")
            samples.extend([value[0]] * count)
        else:
            literal = stream.read(-count)
            if len(literal) != -count:
                raise ValueError("File truncated")
            samples.extend(literal)

def decode_image(data: typing.Union[bytes, bytearray, memoryview],
                 width: int, height: int) -> Image.Image:
    """Decode a stream back to a grayscale image, to eyeball the encoding."""
    samples = decode(data)
    expected = width * height
    if len(samples) > expected:
        raise ValueError(
            f"Stream holds {len(samples)} pixels, more than {width}x{height}")
    elif len(samples) < expected:
        # Normally just the final pixel, if no repeat run swallowed it.
        logging.warning(
            f"Stream is {expected - len(samples)} pixel(s) short; padding"
            " with black")
        samples.extend([0] * (expected - len(samples)))
    return Image.frombytes('L', (width, height), bytes(samples))
