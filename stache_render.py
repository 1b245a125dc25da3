#!/usr/bin/env python3
"""
Render a Mustache template file against one or more JSON data files.

Usage:
  python stache_render.py --template templates/page.mustache --data site.json --data page.json --output out.html

Each --data file becomes one root context; later files are searched first, so
they can override keys from earlier ones. Partials ({{> name}}) are loaded from
--partials, or from the template's directory, trying the suffixes
.mustache, .mustache.html and then the bare name.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from stache import CompileFailed, Renderer

logger = logging.getLogger("stache_render")


def load_contexts(paths: List[str]) -> List[Any]:
    contexts: List[Any] = []
    for p in paths:
        logger.debug(f"Loading data from {p}")
        contexts.append(json.loads(Path(p).read_text(encoding="utf-8")))
    return contexts

# -----------------------------
# CLI
# -----------------------------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="stache-render", description="Render a Mustache template")
    ap.add_argument("--template", required=True, help="Path to the Mustache template")
    ap.add_argument("--data", action="append", default=[], help="JSON data file (repeatable)")
    ap.add_argument("--partials", default=None, help="Directory holding partials (default: template directory)")
    ap.add_argument("--output", default=None, help="Path to write the rendered text (default: stdout)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    template_path = Path(args.template)
    partials_dir = Path(args.partials) if args.partials else template_path.parent

    renderer = Renderer(template_dir=partials_dir)
    try:
        out = renderer.render(template_path.read_text(encoding="utf-8"), *load_contexts(args.data))
    except CompileFailed as e:
        for err in e.errors:
            print(f"{template_path}: {err}", file=sys.stderr)
        return 1

    if args.output:
        out_path = Path(args.output)
        out_path.write_text(out, encoding="utf-8")
        print(f"Wrote: {out_path}")
    else:
        sys.stdout.write(out)
    return 0

if __name__ == "__main__":
    sys.exit(main())
