"""
Edit FNT font files of the Heroes of Might and Magic games as images.

Usage:
    fntworker export font.fnt
    fntworker import font.png
    fntworker export font.fnt --image save.png --offsets data.txt --bg cyan
"""

import sys
import argparse
from pathlib import Path

from .color import ColorSet
from .errors import FontWorkerError
from .font import export_font, import_font
from .image import list_suffixes
from .offsets import TOTAL_LINES, GRID_SIZE

DEFAULT_COLORS = {
    'fg': 'red',
    'bg': 'white',
    'shadow': 'black',
    'outline': 'blue',
}


def epilog():
    return f"""\
colors:
  The recognized values for the color options are black, red, blue, yellow,
  green, magenta, white and cyan. Any of them might also be given as 6
  hexadecimal digits representing an RGB color.

image formats:
  The default image format for export is PNG. Supported formats:
  {list_suffixes()}.

offsets file format:
  Each image file has a companion offsets file of {TOTAL_LINES} text lines. The
  first line holds the 5 header bytes of the font file, in decimal, separated
  by spaces. The other {GRID_SIZE} lines hold {GRID_SIZE} glyphs each (laid out
  like the image), separated by a tab. Each glyph has two numbers separated
  by a single space, the space before and the space after the glyph,
  followed by a description of the glyph.
"""


def default_path(path, suffix):
    """Same file name with another extension."""
    return Path(path).with_suffix(suffix)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='fntworker',
        description='Convert FNT font files to images and back',
        epilog=epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest='op', required=True)

    colors = argparse.ArgumentParser(add_help=False)
    colors.add_argument('--fg', default=DEFAULT_COLORS['fg'],
                        help='Foreground color (default: red)')
    colors.add_argument('--bg', default=DEFAULT_COLORS['bg'],
                        help='Background color (default: white)')
    colors.add_argument('--shadow', default=DEFAULT_COLORS['shadow'],
                        help='Text shadow color (default: black)')
    colors.add_argument('--outline', default=DEFAULT_COLORS['outline'],
                        help='Glyph outline color (default: blue)')

    export = sub.add_parser('export', parents=[colors],
                            help='Export a FNT file to an image and an offsets file')
    export.add_argument('font', help='Path to the FNT file')
    export.add_argument('-i', '--image',
                        help='Image file (default: font file name with PNG extension)')
    export.add_argument('-o', '--offsets',
                        help='Offsets file (default: image file name with TXT extension)')

    imp = sub.add_parser('import', parents=[colors],
                         help='Import an image and its offsets file back to a FNT file')
    imp.add_argument('image', help='Path to the image file')
    imp.add_argument('-f', '--font',
                     help='Font file (default: image file name with FNT extension)')
    imp.add_argument('-o', '--offsets',
                     help='Offsets file (default: image file name with TXT extension)')

    return parser


def run(args):
    colors = ColorSet.from_names(args.bg, args.fg, args.shadow, args.outline)

    if args.op == 'export':
        font_file = Path(args.font)
        image_file = Path(args.image) if args.image else default_path(font_file, '.png')
        offsets_file = Path(args.offsets) if args.offsets else default_path(image_file, '.txt')
        print(f"Exporting {font_file}...")
        font = export_font(colors, font_file, image_file, offsets_file)
        print(f"Glyph height {font.glyph_height}, max width {font.max_width}")
        print(f"Wrote {image_file}")
        print(f"Wrote {offsets_file}")
    else:
        image_file = Path(args.image)
        font_file = Path(args.font) if args.font else default_path(image_file, '.fnt')
        offsets_file = Path(args.offsets) if args.offsets else default_path(image_file, '.txt')
        print(f"Importing {image_file} with {offsets_file}...")
        font = import_font(colors, font_file, image_file, offsets_file)
        print(f"Glyph height {font.glyph_height}, max width {font.max_width}")
        print(f"Wrote {font_file}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        run(args)
    except FileNotFoundError as e:
        print(f"Error: The file {e.filename} was not found.", file=sys.stderr)
        return 1
    except FontWorkerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
