#!/usr/bin/env python
"""
Spritesheet Detect CLI - Find frames and animations in metadata-less sheets

Usage:
    python main.py <sheet_image> [options]

Examples:
    python main.py hero.png                        # Auto-detect strips, grid as fallback
    python main.py hero.png --mode grid            # Plain grid only
    python main.py hero.png --preset rpg_4dir      # 4-row sheet: up/right/down/left
    python main.py hero.png --json hero.json       # Save the result as JSON
    python main.py hero.png --gif previews/        # One GIF per detected strip
"""

import argparse
import logging
import sys
from pathlib import Path


def parse_color(value: str):
    """Parse 'R,G,B' into an RGB tuple"""
    parts = value.split(',')
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"Expected R,G,B, got '{value}'")
    try:
        return tuple(int(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected integer channels, got '{value}'")


def parse_directions(value: str):
    """Parse 'up,right,down,left' into a list (empty entries skip a row)"""
    return [p.strip() or None for p in value.split(',')]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect frames and animation strips in a spritesheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Detection Modes:
  auto        - Animation strips per row band, plain grid if none found
  grid        - Uniform grid from transparent gutters
  animations  - Animation strips only

Animation Names:
  idle, walk, jump, attack, hurt with an optional _up/_right/_down/_left

Examples:
  %(prog)s hero.png
  %(prog)s hero.png --mode grid --json grid.json
  %(prog)s hero.png --bg-color 255,0,255 --bg-tolerance 24
  %(prog)s hero.png --row-directions up,right,down,left
  %(prog)s --list-presets
        """
    )

    parser.add_argument(
        'input',
        type=str,
        nargs='?',  # Optional for --list-presets
        default=None,
        help='Spritesheet image (PNG, GIF, etc.)'
    )

    parser.add_argument(
        '-m', '--mode',
        type=str,
        default='auto',
        choices=['auto', 'grid', 'animations'],
        help='Detection mode (default: auto)'
    )

    parser.add_argument(
        '--preset',
        type=str,
        default=None,
        metavar='NAME',
        help='Use a preset configuration (e.g., rpg_4dir, magenta_key)'
    )

    parser.add_argument(
        '--list-presets',
        action='store_true',
        help='List all available presets and exit'
    )

    # Mask options
    parser.add_argument(
        '--alpha-threshold',
        type=int,
        default=None,
        help='Minimum alpha for content pixels 0-255 (default: 1)'
    )

    parser.add_argument(
        '--bg-tolerance',
        type=int,
        default=None,
        help='L1 colour distance treated as background 0-765 (default: 16)'
    )

    parser.add_argument(
        '--bg-color',
        type=parse_color,
        default=None,
        metavar='R,G,B',
        help='Explicit background colour (estimated from the border if omitted)'
    )

    parser.add_argument(
        '--min-fill-ratio',
        type=float,
        default=None,
        help='Minimum filled fraction of a strip frame 0-1 (default: 0.01)'
    )

    # Classifier options
    parser.add_argument('--motion-epsilon', type=float, default=None,
                        help='Centroid range (px) below which a strip is idle (default: 2)')
    parser.add_argument('--bias-epsilon', type=float, default=None,
                        help='Centroid bias (px) considered significant (default: 0.5)')
    parser.add_argument('--area-spike-ratio', type=float, default=None,
                        help='Peak/mean filled area for attack (default: 1.35)')
    parser.add_argument('--jump-ratio', type=float, default=None,
                        help='Vertical dominance factor for jump (default: 1.6)')
    parser.add_argument('--jerkiness-ratio', type=float, default=None,
                        help='Path length / range ratio for hurt (default: 2.2)')

    parser.add_argument(
        '--row-directions',
        type=parse_directions,
        default=None,
        metavar='DIRS',
        help='Comma separated direction per row band, e.g. up,right,down,left'
    )

    # Output
    parser.add_argument(
        '--json',
        type=str,
        default=None,
        metavar='PATH',
        help='Write the detection result as JSON'
    )

    parser.add_argument(
        '--export-frames',
        type=str,
        default=None,
        metavar='DIR',
        help='Export every detected frame as a PNG'
    )

    parser.add_argument(
        '--gif',
        type=str,
        default=None,
        metavar='DIR',
        help='Export one animated GIF per strip (or one for the grid)'
    )

    parser.add_argument(
        '--frame-duration',
        type=int,
        default=100,
        help='Frame duration in ms for GIF export (default: 100)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging'
    )

    return parser


def resolve_options(args):
    """Preset (if any) overridden by explicit flags"""
    from spritesheet_detect.core.presets import get_preset
    from spritesheet_detect.detection import DetectionOptions

    options = DetectionOptions()
    if args.preset:
        preset = get_preset(args.preset)
        if not preset:
            return None
        print(f"Using preset: {preset.name} ({preset.description})")
        options = preset.detection_options()

    return options.merged(
        alpha_threshold=args.alpha_threshold,
        bg_tolerance=args.bg_tolerance,
        bg_color=args.bg_color,
        min_fill_ratio=args.min_fill_ratio,
        motion_epsilon=args.motion_epsilon,
        bias_epsilon=args.bias_epsilon,
        area_spike_ratio=args.area_spike_ratio,
        jump_ratio=args.jump_ratio,
        jerkiness_ratio=args.jerkiness_ratio,
        row_directions=args.row_directions,
    )


def print_animations(result):
    print(f"Frame size: {result.frame_width}x{result.frame_height}")
    print(f"Strips: {len(result.animations)} (typical length: {result.cols} frames)")
    for i, strip in enumerate(result.animations):
        first = strip.rects[0]
        print(f"  {i}. {strip.name:<14} {len(strip.rects):>3} frames at y={first.y}")


def print_grid(result):
    print(f"Frame size: {result.frame_width}x{result.frame_height}")
    print(f"Grid: {result.cols} cols x {result.rows} rows ({len(result.rects)} frames)")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if args.list_presets:
        from spritesheet_detect.core.presets import get_preset_manager
        manager = get_preset_manager()

        print("Available Detection Presets:\n")
        for name in manager.list_all():
            preset = manager.get(name)
            desc = preset.description[:50] + "..." if len(preset.description) > 50 else preset.description
            print(f"  {name:<16} - {desc}")

        print(f"\nTotal: {len(manager.list_all())} presets")
        print("Usage: --preset <name>")
        return 0

    if not args.input:
        print("Error: Input file is required")
        print("Usage: python main.py <sheet_image> [options]")
        print("       python main.py --list-presets")
        return 1

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {args.input}")
        return 1

    # Import here to avoid slow startup for --help
    from spritesheet_detect import SheetParser, SheetExporter, detect_grid, detect_animations

    try:
        options = resolve_options(args)
        if options is None:
            print(f"Error: Preset '{args.preset}' not found")
            print("Use --list-presets to see available presets")
            return 1

        sheet = SheetParser.parse(input_path)
        print(f"Detecting: {input_path.name} ({sheet.width}x{sheet.height})")

        result = None
        strips = []
        if args.mode in ('auto', 'animations'):
            animations = detect_animations(sheet, options)
            if animations and animations.animations:
                result = animations
                strips = [(s.name, s.rects) for s in animations.animations]
                print_animations(animations)

        if result is None and args.mode in ('auto', 'grid'):
            grid = detect_grid(sheet, options)
            if grid and grid.rects:
                result = grid
                strips = [('grid', grid.rects)]
                print_grid(grid)

        if result is None:
            print("Could not auto-detect frames; configure the grid manually.")
            return 1

        if args.json:
            path = SheetExporter.save_json(result, args.json)
            print(f"Saved: {path}")

        if args.export_frames:
            for i, (name, rects) in enumerate(strips):
                prefix = f"{i:02d}_{name}"
                SheetExporter.to_frames(sheet, rects, args.export_frames, prefix=prefix)
            print(f"Frames: {args.export_frames}")

        if args.gif:
            for i, (name, rects) in enumerate(strips):
                gif_path = Path(args.gif) / f"{input_path.stem}_{i:02d}_{name}.gif"
                SheetExporter.to_gif(sheet, rects, gif_path, duration=args.frame_duration)
            print(f"GIFs: {args.gif}")

    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1

    print("Done!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
