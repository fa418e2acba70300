from __future__ import annotations

import argparse
import contextlib
import errno
import logging
import os
import shutil
import sys
import tempfile

from .encoder import assemble, to_hex, to_listing
from .errors import AsmError, IOFailure

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


def read_source(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise IOFailure(f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise IOFailure(f"cannot read {path}: not valid UTF-8 ({e.reason} at byte {e.start})") from e


def _stage(path: str, data: str) -> str:
    """Write `data` to a temp file beside `path` and return the temp file name."""
    if os.path.isdir(path):
        raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
    fd, tmp = tempfile.mkstemp(dir=os.path.dirname(os.path.abspath(path)), prefix=".asm20-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        if os.path.exists(path):
            shutil.copymode(path, tmp)
        else:
            os.chmod(tmp, 0o644)
    except OSError:
        os.remove(tmp)
        raise
    return tmp


def write_outputs(outputs: dict[str, str]):
    # все файлы сначала пишутся во временные, затем заменяют цели;
    # при ошибке существующие цели не трогаются
    staged: list[tuple[str, str]] = []
    path = ""
    try:
        for path, data in outputs.items():
            staged.append((_stage(path, data), path))
        for tmp, path in staged:
            os.replace(tmp, path)
    except OSError as e:
        for tmp, _ in staged:
            with contextlib.suppress(FileNotFoundError):
                os.remove(tmp)
        raise IOFailure(f"cannot write {path}: {e.strerror or e}") from e


def translate(source: str, target: str, listing: str | None = None, strict: bool = True) -> int:
    code = assemble(read_source(source), strict=strict)
    log.info("assembled %d instructions from %s", len(code), source)
    outputs = {target: to_hex(code)}
    if listing:
        outputs[listing] = to_listing(code)
    write_outputs(outputs)
    return len(code)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="asm20", description="assembly -> 20-bit hex machine code translator")
    ap.add_argument("source", help="input assembly file")
    ap.add_argument("target", help="output hex file (one 5-digit word per line)")
    ap.add_argument("--listing", help="write address/hex/source listing to file")
    ap.add_argument(
        "--lenient",
        action="store_true",
        help="do not range-check registers and immediates (oversized fields are emitted as is)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="log every encoded instruction")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", level=logging.DEBUG, stream=sys.stderr)

    try:
        translate(args.source, args.target, listing=args.listing, strict=not args.lenient)
    except AsmError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Assembly completed. Output written to {args.target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
