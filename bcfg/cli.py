from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .config import load_request
from .errors import BcfgUserError
from .generators import get_generator, list_languages
from .types import GenerationRequest
from .values import BUILTIN_NAMES
from .version import tool_version

_LOG = logging.getLogger("bcfg")


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug or os.environ.get("BCFG_DEBUG") else logging.INFO
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bcfg",
        description="Build-config constants generator for Kotlin and Java",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--debug", action="store_true", help="verbose logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments of generate/render
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("request", type=Path, help="YAML request file")
        sp.add_argument(
            "--language",
            choices=list_languages(),
            help="target language (overrides the request file)",
        )
        sp.add_argument(
            "--verify",
            action="store_true",
            help="parse the generated source and fail on syntax errors",
        )

    sp_gen = sub.add_parser("generate", help="write the generated source file")
    add_common(sp_gen)
    sp_gen.add_argument(
        "-o", "--output-dir",
        type=Path,
        help="output directory (overrides the request file)",
    )

    sp_render = sub.add_parser("render", help="print the generated source to stdout")
    add_common(sp_render)

    sub.add_parser("types", help="list built-in type names")

    return p


def _load(ns: argparse.Namespace) -> GenerationRequest:
    return load_request(
        ns.request,
        output_dir=getattr(ns, "output_dir", None),
        language=ns.language,
    )


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.debug)

    try:
        if ns.cmd == "types":
            for name in sorted(set(BUILTIN_NAMES.values())):
                sys.stdout.write(name + "\n")
            return 0

        request = _load(ns)
        generator = get_generator(request.language)

        if ns.cmd == "generate":
            # nothing to generate: the output is left untouched
            if request.is_empty:
                _LOG.info("No fields in %s, skipping", ns.request)
                return 0
            path = generator.generate(request, verify=ns.verify)
            sys.stdout.write(f"{path}\n")
            return 0

        if ns.cmd == "render":
            sys.stdout.write(generator.render(request, verify=ns.verify))
            return 0

    except BcfgUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
