"""Headless Layer Aligner - CLI entry point.

Lays the given images out on a canvas of the given size, applies reference
points read from a JSON file and runs auto-align, then prints the resulting
layer geometry and any mismatch warnings as JSON.

The refs file holds a list with one entry per image (in argument order); each
entry is an object with any of body_top_y, face_bottom_y, body_bottom_y,
eye_left_x, eye_left_y, eye_right_x, eye_right_y, or null for the defaults.

Usage:
    layer-aligner-headless <image> <image> [...] [--refs REFS] [--canvas WxH]

Examples:
    layer-aligner-headless front.png side.jpg --refs refs.json
    layer-aligner-headless a.png b.png c.webp --canvas 1600x900 -o aligned.json
"""

import argparse
import json
import logging
import os
import sys

from layer_aligner.constants import ACCEPTED_IMAGE_EXTENSIONS
from layer_aligner.models.layer import ReferencePoints
from layer_aligner.models.layer_store import LayerStore
from layer_aligner.models.settings import AlignmentThresholds
from layer_aligner.models.transform import CanvasBounds
from layer_aligner.services.alignment_solver import run_auto_align
from layer_aligner.services.image_loader import filter_supported, read_image_size


def _parse_canvas(text: str) -> CanvasBounds:
    """Parse 'WIDTHxHEIGHT' into CanvasBounds."""
    try:
        width, height = (float(part) for part in text.lower().split('x'))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}")
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError("canvas size must be positive")
    return CanvasBounds(width, height)


def _load_refs(path: str, count: int) -> list:
    """Read the refs file into a list of ReferencePoints (or None) per image.

    Args:
        path: JSON file path.
        count: Number of images; missing trailing entries become None.

    Returns:
        List of length count.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError("refs file must contain a JSON list")
    refs = []
    for index, entry in enumerate(data[:count]):
        if entry is None:
            refs.append(None)
            continue
        if not isinstance(entry, dict):
            raise ValueError(f"entry {index + 1} must be an object or null")
        try:
            refs.append(ReferencePoints.from_dict(entry))
        except (TypeError, ValueError):
            raise ValueError(f"entry {index + 1} has a non-numeric reference point")
    refs.extend([None] * (count - len(refs)))
    return refs


def align_images(paths, bounds, refs=None, thresholds=None):
    """Build a store for the images, lay it out, apply refs and align.

    Args:
        paths: Accepted image paths, reference image first.
        bounds: CanvasBounds for the initial layout.
        refs: Optional list of ReferencePoints/None per image.
        thresholds: Optional AlignmentThresholds.

    Returns:
        (store, AlignmentResult)
    """
    store = LayerStore()
    ids = store.add_layers(paths)
    for layer_id, path in zip(ids, paths):
        store.apply_decoded_size(layer_id, *read_image_size(path), bounds=bounds)
    store.layout_new_layers(bounds)
    for layer_id, layer_refs in zip(ids, refs or []):
        if layer_refs is not None:
            store.set_refs(layer_id, layer_refs)
    return store, run_auto_align(store, thresholds)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Align image layers using marked reference points (headless).',
    )
    parser.add_argument(
        'images',
        nargs='+',
        help=f"Image files ({', '.join(ACCEPTED_IMAGE_EXTENSIONS)}); the first is the reference.",
    )
    parser.add_argument(
        '-r', '--refs',
        help='JSON file with one reference point object (or null) per image.',
    )
    parser.add_argument(
        '-c', '--canvas',
        type=_parse_canvas,
        default=CanvasBounds(1200, 800),
        help='Canvas size as WIDTHxHEIGHT (default: 1200x800).',
    )
    parser.add_argument(
        '-o', '--output',
        help='Write the JSON result to this file instead of stdout.',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    missing = [path for path in args.images if not os.path.isfile(path)]
    if missing:
        print(f"Error: Input file not found: {missing[0]}", file=sys.stderr)
        sys.exit(1)

    paths = filter_supported(args.images)
    if len(paths) < 2:
        print("Error: At least two supported images are needed to align.", file=sys.stderr)
        sys.exit(1)

    refs = None
    if args.refs:
        try:
            refs = _load_refs(args.refs, len(paths))
        except (OSError, ValueError) as e:
            print(f"Error: Could not read refs file: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        store, result = align_images(paths, args.canvas, refs, AlignmentThresholds())
    except OSError as e:
        # Pillow's UnidentifiedImageError is an OSError
        print(f"Error: Could not read image: {e}", file=sys.stderr)
        sys.exit(1)

    output = {
        'canvas': {'width': args.canvas.width, 'height': args.canvas.height},
        'layers': [layer.to_dict() for layer in store.layers],
        'skipped': result.skipped,
        'warnings': result.warnings,
    }
    text = json.dumps(output, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
    else:
        print(text)
    return 0


if __name__ == '__main__':
    main()
