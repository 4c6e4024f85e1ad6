# Command line summary of a Trellis configuration file

import argparse
import logging
import math
import sys

from . import __version__
from .actions import Summary
from .bitmap import Bitmap, export_pbm
from .parser import Config, read_conf


parser = argparse.ArgumentParser(
    prog = 'trellis_conf', description = 'Summarise Trellis Configuration')
parser.add_argument(
    '--version', action = 'version', version = __version__)
parser.add_argument(
    '-v', '--verbose', default = False, action = 'store_true',
    help = 'Log every parsed record')
parser.add_argument(
    '-p', '--pbm', default = None,
    help = 'Write tile occupancy map to this PBM file')
parser.add_argument(
    'config', help = 'Configuration file to parse')


# One pixel per tile in declaration order, set if the tile has any records.
def tile_map(summary):
    side = max(1, int(math.ceil(math.sqrt(len(summary.tiles)))))
    bitmap = Bitmap(side, side)
    for n, tile in enumerate(summary.tiles):
        bitmap.set(n % side, n // side, tile in summary.configured)
    return bitmap


def main(argv = None):
    args = parser.parse_args(argv)
    logging.basicConfig(
        level = logging.DEBUG if args.verbose else logging.INFO,
        format = '%(levelname)s %(message)s')

    summary = Summary()
    config = Config(summary)
    try:
        with open(args.config, encoding = 'utf-8') as input_file:
            ok = read_conf(config, input_file)
    except OSError as error:
        print('%s: %s' % (args.config, error.strerror), file = sys.stderr)
        return 1
    if not ok:
        print('%s: %s' % (args.config, config.error), file = sys.stderr)
        return 1

    for line in summary.lines():
        print(line)
    if args.pbm:
        export_pbm(tile_map(summary), args.pbm)
        logging.info('Tile map written to %s', args.pbm)
    return 0


if __name__ == '__main__':
    sys.exit(main())
