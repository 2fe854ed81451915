from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from catalog_split.app_factory import build_split_service, create_app
from catalog_split.config.ini_config import IniConfig
from catalog_split.domain.errors import CatalogSplitError


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="catalog_split",
        description="Split a generated product catalog into one module per manufacturer.",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="run the web UI/API (default)")

    split = sub.add_parser("split", help="run one split and exit")
    split.add_argument("--source", help="override [paths] source_file")
    split.add_argument("--output-dir", help="override [paths] output_dir")
    split.add_argument("--lenient", action="store_true", help="stop at an unterminated object instead of failing")

    return parser.parse_args(argv)


def run_split(args: argparse.Namespace) -> int:
    settings = IniConfig.from_env_or_default().load_settings()

    overrides = {}
    if args.source:
        overrides["source_file"] = Path(args.source).resolve()
    if args.output_dir:
        overrides["output_dir"] = Path(args.output_dir).resolve()
    if args.lenient:
        overrides["strict"] = False
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    service = build_split_service(settings)
    try:
        result = service.split_file(settings.source_file)
    except (CatalogSplitError, OSError, ValueError) as e:
        logging.getLogger("catalog_split").error("Split aborted: %s", e)
        return 2

    for w in result.written:
        print(f"  wrote {w.path.name} ({w.identifier})")
    for f in result.failures:
        print(f"  FAILED block {f.position}: {f.reason} [{f.preview}]")
    print(f"{result.status}: {len(result.written)}/{result.block_count} modules in {result.output_dir}")

    return 0 if result.status == "ok" else 1


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = _parse_args(argv)

    if args.command == "split":
        return run_split(args)

    app = create_app()
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
