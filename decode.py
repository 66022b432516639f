"""Decode BITS transmissions and report their version sums and values.

Each input holds one hex-encoded transmission. Inputs come from paths on the
command line, glob patterns, or stdin; results are printed one per input as
plain text or JSON.
"""

from __future__ import annotations

import argparse
import functools
import json
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

import tqdm

from packet_decoder.dump_packet_stream import dump_packet_stream
from packet_decoder.errors import DecodeError
from packet_decoder.evaluate import value, version_sum
from packet_decoder.transmission import decode_transmission
from utils import get_input_paths, read_transmission

STDIN_NAME = "<stdin>"
# show a progress bar once a run covers this many inputs
PROGRESS_THRESHOLD = 2


@dataclass(frozen=True, slots=True)
class DecodeResult:
    source: str
    version_sum: int | None = None
    value: int | None = None
    dump: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self, parts: Sequence[int] = (1, 2)) -> dict[str, object]:
        d: dict[str, object] = {"source": self.source}
        if not self.ok:
            d["error"] = self.error
            return d
        if self.dump is not None:
            d["dump"] = self.dump
            return d
        if 1 in parts:
            d["version_sum"] = self.version_sum
        if 2 in parts:
            d["value"] = self.value
        return d


def decode_one(source: str, text: str, *, dump: bool = False) -> DecodeResult:
    try:
        if dump:
            return DecodeResult(source=source, dump=dump_packet_stream(text))
        packet = decode_transmission(text)
    except DecodeError as exc:
        return DecodeResult(source=source, error=f"{type(exc).__name__}: {exc}")
    return DecodeResult(source=source, version_sum=version_sum(packet), value=value(packet))


def _format_plain(result: DecodeResult, parts: Sequence[int]) -> str:
    if result.dump is not None:
        return f"# {result.source}\n{result.dump}".rstrip("\n")
    fields = []
    if 1 in parts:
        fields.append(f"version_sum={result.version_sum}")
    if 2 in parts:
        fields.append(f"value={result.value}")
    return f"{result.source}: " + " ".join(fields)


def _iter_inputs(paths: Sequence[str], stdin_lines: Sequence[str]) -> Iterable[tuple[str, Callable[[], str]]]:
    for line in stdin_lines:
        yield STDIN_NAME, lambda line=line: line
    for path in paths:
        yield path, functools.partial(read_transmission, path)


def run(paths: Sequence[str], *, use_stdin: bool = False, dump: bool = False) -> list[DecodeResult]:
    results: list[DecodeResult] = []
    stdin_lines = [line.strip() for line in sys.stdin if line.strip()] if use_stdin else []
    total = len(stdin_lines) + len(paths)
    inputs = _iter_inputs(paths, stdin_lines)
    if total >= PROGRESS_THRESHOLD:
        inputs = tqdm.tqdm(inputs, total=total, file=sys.stderr, desc="decode")
    for source, load in inputs:
        try:
            text = load()
        except (OSError, UnicodeDecodeError) as exc:
            result = DecodeResult(source=source, error=f"{type(exc).__name__}: {exc}")
        else:
            result = decode_one(source, text, dump=dump)
        if not result.ok:
            print(f"[decode] {source}: {result.error}", file=sys.stderr)
        results.append(result)
    return results


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Decode BITS transmissions and evaluate their packet trees.",
    )
    parser.add_argument("paths", nargs="*", help="Files holding one hex transmission each")
    parser.add_argument(
        "--input-glob",
        action="append",
        default=[],
        help="Glob pattern of transmission files (may be repeated)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read transmissions from stdin, one per line.",
    )
    parser.add_argument(
        "--part",
        type=int,
        choices=(1, 2),
        default=None,
        help="Report only the version sum (1) or only the value (2)",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the text dump of each packet tree instead of evaluating it.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of plain text.",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output.",
    )

    args = parser.parse_args(argv)

    paths = list(args.paths) + get_input_paths(args.input_glob)
    if not paths and not args.stdin:
        parser.error("no input: give paths, --input-glob or --stdin")

    results = run(paths, use_stdin=args.stdin, dump=args.dump)

    parts = (args.part,) if args.part else (1, 2)
    ok = [r for r in results if r.ok]
    if args.json:
        indent = 2 if args.pretty else None
        print(json.dumps([r.as_dict(parts) for r in results], indent=indent))
    else:
        for r in ok:
            print(_format_plain(r, parts))

    return 0 if len(ok) == len(results) else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
