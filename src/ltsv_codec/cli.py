from __future__ import annotations

import argparse
import asyncio
import gzip
import json
import sys
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import TextIO

from ltsv_codec.core.decoder import decode
from ltsv_codec.core.encoder import encode
from ltsv_codec.core.errors import LtsvError, MalformedField
from ltsv_codec.core.files import iter_path, resolve_encoding
from ltsv_codec.core.models import BlankLinePolicy, DecodeMode, Record
from ltsv_codec.tools.codec import to_record


def _emit(item: Record | MalformedField, out: TextIO) -> int:
    """Print one decoded item; return 1 for an error, else 0."""
    if isinstance(item, MalformedField):
        print(f"warning: {item}", file=sys.stderr)
        return 1
    out.write(json.dumps(list(item.pairs), ensure_ascii=False) + "\n")
    return 0


async def _decode_file(path: Path, *, mode: DecodeMode, blank: BlankLinePolicy, out: TextIO) -> int:
    errors = 0
    async for item in iter_path(path, mode=mode, blank_lines=blank):
        errors += _emit(item, out)
    return errors


def _cmd_decode(args: argparse.Namespace, out: TextIO) -> int:
    mode = DecodeMode.COLLECT if args.lenient else DecodeMode.STRICT
    blank = BlankLinePolicy.SKIP if args.skip_blank else BlankLinePolicy.EMPTY_RECORD

    if args.path == "-":
        errors = sum(_emit(item, out) for item in decode(sys.stdin, mode=mode, blank_lines=blank))
    else:
        errors = asyncio.run(_decode_file(Path(args.path), mode=mode, blank=blank, out=out))
    return 1 if errors else 0


def _iter_json_records(lines: Iterable[str]) -> Iterator[Record]:
    # Blank lines are skipped; records are numbered like iter_encode numbers them.
    index = 0
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            item = json.loads(line)
        except json.JSONDecodeError as e:
            raise ValueError(f"line {line_no}: invalid JSON ({e.msg})") from e
        yield to_record(item, index)
        index += 1


def _open_json_source(path: str) -> TextIO:
    if path == "-":
        return sys.stdin
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Input file not found: {p}")
    if p.suffix.lower() == ".gz":
        return gzip.open(p, mode="rt", encoding=resolve_encoding())
    return p.open(encoding=resolve_encoding())


def _cmd_encode(args: argparse.Namespace, out: TextIO) -> int:
    src = _open_json_source(args.path)
    try:
        encode(_iter_json_records(src), out)
    finally:
        if src is not sys.stdin:
            src.close()
    return 0


def _cmd_serve(args: argparse.Namespace, out: TextIO) -> int:
    from ltsv_codec.server.ltsv_server import main as serve

    serve([])
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ltsv-codec",
        description="Read and write Labeled Tab-Separated Values.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("decode", help="Print each LTSV record as a JSON array of [label, value] pairs")
    d.add_argument("path", nargs="?", default="-", help="LTSV file (plain or .gz); '-' reads stdin")
    d.add_argument("--skip-blank", action="store_true", help="Drop empty lines instead of emitting []")
    d.add_argument(
        "--lenient",
        action="store_true",
        help="Report malformed lines on stderr and keep going (exit code 1 if any)",
    )
    d.set_defaults(func=_cmd_decode)

    e = sub.add_parser("encode", help="Turn JSON lines (objects or pair arrays) into LTSV")
    e.add_argument("path", nargs="?", default="-", help="JSON lines file; '-' reads stdin")
    e.set_defaults(func=_cmd_encode)

    s = sub.add_parser("serve", help="Start the MCP server over stdio")
    s.set_defaults(func=_cmd_serve)
    return p


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entrypoint."""
    args = build_parser().parse_args(argv)

    try:
        code = args.func(args, sys.stdout)
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (LtsvError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
