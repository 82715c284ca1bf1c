from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from pathlib import Path

from .errors import GoUmlError


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="gouml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="Print gouml version.")

    p_render = sub.add_parser("render", help="Render a PlantUML class diagram for a Go directory.")
    p_render.add_argument("directory", help="Directory containing the .go files.")
    p_render.add_argument(
        "--recursive",
        action="store_true",
        help="Also scan sub-directories (vendor/, testdata/ and hidden dirs are skipped).",
    )
    p_render.add_argument("--out", default=None, help="Output file (default: stdout).")
    p_render.add_argument("--no-cache", action="store_true", help="Always re-run the Go scanner.")
    p_render.add_argument(
        "--cache-dir",
        default=None,
        help="Scan cache directory (default: GOUML_CACHE_DIR or OS cache).",
    )

    p_cache = sub.add_parser("cache", help="Manage the local scan cache.")
    cache_sub = p_cache.add_subparsers(dest="cache_cmd", required=True)
    p_clear = cache_sub.add_parser("clear", help="Delete all cached scans.")
    p_clear.add_argument(
        "--cache-dir",
        default=None,
        help="Scan cache directory (default: GOUML_CACHE_DIR or OS cache).",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        _dispatch(args)
    except GoUmlError as e:
        print(f"gouml: error: {e}", file=sys.stderr)
        raise SystemExit(1) from None


def _dispatch(args: argparse.Namespace) -> None:
    if args.cmd == "version":
        try:
            print(importlib.metadata.version("gouml"))
        except Exception:
            # Best-effort fallback for editable/local-only contexts.
            print("0.0.0")
        return

    if args.cmd == "render":
        from .diagram import class_diagram

        text = class_diagram(
            args.directory,
            recursive=bool(args.recursive),
            use_cache=not args.no_cache,
            cache_dir=Path(args.cache_dir) if args.cache_dir else None,
        )
        if args.out:
            Path(args.out).write_text(text + "\n", encoding="utf-8")
        else:
            print(text)
        return

    if args.cmd == "cache":
        from .cache import ScanCache
        from .paths import default_cache_root

        root = Path(args.cache_dir) if args.cache_dir else default_cache_root()
        if args.cache_cmd == "clear":
            deleted = ScanCache(root).clear()
            print(f"removed {len(deleted)} cached scan(s)")
            return


if __name__ == "__main__":
    main()
