#!/usr/bin/env python3
# pgmrle command line tool.
#
# Turns a grayscale image into C source for the display firmware: the RLE data
# array, the Image struct for it, and optionally a logo or screensaver
# VariantAnimation that draws it.
#
# Copyright 2023 Philip Boulain.
# Licensed under the EUPL-1.2-or-later.

import argparse
import logging
import sys
import typing
import carray
import pgmrle
import pixmap
import variantanim

def build_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(
        prog="pgmrle",
        description="Grayscale image to RLE C source encoder.",
        epilog="Reads a plain-text PGM (with or without its export header) or "
               "any image PIL can read, and writes C source to stdout.")
    arg_parser.add_argument("file", help="Image file to read")
    arg_parser.add_argument("prefix", nargs="?", default=carray.DEFAULT_PREFIX,
        help="Name prefix for the generated C structs")
    animations = arg_parser.add_mutually_exclusive_group()
    animations.add_argument("--logo", action="store_true",
        help="Also generate fade in/out logo animations")
    animations.add_argument("--screensaver", action="store_true",
        help="Also generate a panning screensaver animation")
    arg_parser.add_argument("--screen-width", type=int,
        default=variantanim.SCREEN_WIDTH,
        help="Display width the animations are laid out for")
    arg_parser.add_argument("--screen-height", type=int,
        default=variantanim.SCREEN_HEIGHT,
        help="Display height the animations are laid out for")
    arg_parser.add_argument("--keep-last", action="store_true",
        help="Encode the final pixel even when no run swallowed it")
    arg_parser.add_argument("-o", "--output",
        help="File to write, will be overwritten (default stdout)")
    arg_parser.add_argument("--round-trip", metavar="IMAGE",
        help="Decode the result back to this image file to test")
    arg_parser.add_argument("-v", "--verbose", action="store_true",
        help="Log what is going on")
    return arg_parser

def generate(args: argparse.Namespace) -> str:
    image = pixmap.read_pixmap(args.file)
    logging.info(f"Read {image.width}x{image.height} image from {args.file}")
    data = pgmrle.encode(image.samples, keep_last=args.keep_last)
    logging.info(f"Encoded to {len(data)} bytes")

    if args.round_trip:
        with pgmrle.decode_image(data, image.width, image.height) as decoded:
            decoded.save(args.round_trip)
        logging.info(f"Wrote round trip to {args.round_trip}")

    sections = [carray.format_image(
        args.prefix, image.width, image.height, data)]
    animations: typing.Tuple[variantanim.Animation, ...] = ()
    if args.logo:
        animations = variantanim.logo_animations(
            args.prefix, image.width, image.height,
            args.screen_width, args.screen_height)
    elif args.screensaver:
        animations = (variantanim.screensaver_animation(
            args.prefix, image.width, image.height,
            args.screen_width, args.screen_height),)
    for animation in animations:
        sections.append(variantanim.format_animation(
            animation, f"{args.prefix}_image"))
    return '\n'.join(sections)

def main(argv: typing.Optional[typing.List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s")
    try:
        carray.check_prefix(args.prefix)
    except ValueError as e:
        logging.error(f"Bad prefix: {e}")
        return 1
    try:
        source = generate(args)
        if args.output:
            with open(args.output, "w") as outfile:
                outfile.write(source)
        else:
            sys.stdout.write(source)
    except (ValueError, OSError) as e:
        # Includes MalformedInput and SampleOutOfRange.
        logging.error(f"{args.file}: {e}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
