from __future__ import annotations

import argparse
import difflib
import json
import sys
from pathlib import Path

from translator.encoder import assemble, to_hex, to_listing
from translator.errors import AsmError


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def write_text(path: Path, data: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data, encoding="utf-8")


def load_meta(gdir: Path) -> dict:
    meta_file = gdir / "meta.json"
    return json.loads(read_text(meta_file)) if meta_file.exists() else {}


def translate_dir(gdir: Path) -> dict[str, str]:
    meta = load_meta(gdir)
    code = assemble(read_text(gdir / "program.asm"), strict=meta.get("strict", True))
    return {"program.hex": to_hex(code), "program.lst": to_listing(code)}


def generate_golden(gdir: Path):
    out = translate_dir(gdir)
    write_text(gdir / "program.hex", out["program.hex"])
    # листинг обновляем только если он уже есть
    if (gdir / "program.lst").exists():
        write_text(gdir / "program.lst", out["program.lst"])
    if not (gdir / "meta.json").exists():
        write_text(gdir / "meta.json", json.dumps({"strict": True}) + "\n")


def verify_one(gdir: Path) -> bool:
    ok = True
    fresh = translate_dir(gdir)
    for fname, data in fresh.items():
        path = gdir / fname
        if not path.exists():
            continue
        expected = read_text(path)
        if data != expected:
            print(f"[mismatch][{gdir.name}] {fname} differs")
            for line in difflib.unified_diff(
                expected.splitlines(), data.splitlines(), fromfile=f"golden/{fname}", tofile=f"fresh/{fname}", lineterm=""
            ):
                print(line)
            ok = False
    return ok


def main():
    ap = argparse.ArgumentParser(description="Generate or verify golden hex outputs")
    ap.add_argument("--golden-dir", default="golden", help="directory with golden/<name>/program.asm")
    ap.add_argument("--only", nargs="*", help="process only these test names")
    ap.add_argument("--verify", action="store_true", help="compare fresh output with stored files instead of writing")
    ap.add_argument("--fail-fast", action="store_true", help="stop on first mismatch")
    args = ap.parse_args()

    golden_dir = Path(args.golden_dir)
    dirs = sorted(d for d in golden_dir.iterdir() if (d / "program.asm").exists())
    if args.only:
        dirs = [d for d in dirs if d.name in args.only]

    any_failed = False
    for gdir in dirs:
        try:
            if args.verify:
                print(f"[verify] {gdir.name}")
                if not verify_one(gdir):
                    any_failed = True
                    if args.fail_fast:
                        sys.exit(1)
            else:
                print(f"[golden] Generating {gdir.name}")
                generate_golden(gdir)
        except AsmError as e:
            print(f"[error][{gdir.name}] {e}")
            any_failed = True
            if args.fail_fast:
                sys.exit(1)

    if any_failed:
        sys.exit(1)
    if args.verify:
        print("[verify] all tests OK")


if __name__ == "__main__":
    main()
