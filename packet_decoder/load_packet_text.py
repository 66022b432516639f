# -*- coding: utf-8 -*-
# Re-encode a dumped packet tree (see dump_packet_stream) into a hex transmission.
# Python 3.10+
# Usage:  python3 -m packet_decoder.load_packet_text <path_to_dumped_text>

from __future__ import annotations
from io import StringIO
import sys

from .bitio import BitWriter
from .hexcodec import hex_encode
from .packets import Packet


def load_packet_text(tw: StringIO) -> tuple[int, str]:
  writer = BitWriter()
  Packet.load_from_text(tw).dump(writer)
  if tw.read().strip():
    raise ValueError("trailing data after the outermost packet")
  nbits = writer.num_written_bits()
  return nbits, hex_encode(writer.get_bytes(), nbits)


if __name__ == '__main__':
  path = None
  if len(sys.argv) > 1:
    path = sys.argv[1]
  else:
    print(f'Usage: python3 -m packet_decoder.load_packet_text <path_to_dumped_text>', file=sys.stderr)
    sys.exit(1)

  with open(path, 'r') as f:
    text = f.read()
    tw = StringIO(text)
    cnt, hex_text = load_packet_text(tw)
    print(hex_text)
    print(f'total bit length : {cnt}', file=sys.stderr)
    print(f'hex digits       : {len(hex_text)}', file=sys.stderr)
