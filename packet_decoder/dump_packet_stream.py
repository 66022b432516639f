# -*- coding: utf-8 -*-
# Text rendering of a decoded BITS packet tree, one field group per line.
# Python 3.10+
# Usage:  python3 -m packet_decoder.dump_packet_stream [--stdin | path/to/transmission]

from __future__ import annotations
from io import StringIO
import sys

from .transmission import decode_transmission


def dump_packet_stream(text: str) -> str:
  tw = StringIO()
  decode_transmission(text).dump_string(tw)
  return tw.getvalue()

if __name__ == '__main__':
  if len(sys.argv) >= 2 and sys.argv[1] == '--stdin':
    print('Processing stdin...', file=sys.stderr)
    print(dump_packet_stream(sys.stdin.read()), end='')
  elif len(sys.argv) >= 2:
    print(f'Processing {sys.argv[1]}...', file=sys.stderr)
    with open(sys.argv[1], 'r') as f:
      text = f.read()
    print(dump_packet_stream(text), end='')
  else:
    print('Usage: python3 -m packet_decoder.dump_packet_stream [--stdin | path/to/transmission]', file=sys.stderr)
    sys.exit(1)
