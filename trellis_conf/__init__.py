# Trellis chip configuration parser

__version__ = '0.1.0'

from .parser import ErrorKind, ConfError, Config, read_conf, parse_file
from .actions import Actions, Summary
from .bitmap import Bitmap, export_pbm
