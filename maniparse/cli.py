from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from maniparse.core.config import load_settings
from maniparse.core.manifest.errors import ExpansionError, ManifestReadError, ParseError
from maniparse.core.manifest.loader import load_manifest
from maniparse.core.manifest.models import Manifest

_log = logging.getLogger("maniparse.cli")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2


def render_report(manifest: Manifest, flavors: List[str]) -> str:
    keys = manifest.export_keys()
    ordered_keys = sorted(keys) if keys is not None else None

    lines = [
        f"Name: {manifest.name}",
        f"Version: {manifest.version}",
        f"Exports: {', '.join(ordered_keys) if ordered_keys is not None else None}",
        "Flavors:",
    ]
    lines.extend(f"\t{flavor}" for flavor in flavors)

    if ordered_keys is not None:
        lines.append("Exports:")
        for key in ordered_keys:
            lines.append(f"\t{key}")
            lines.extend(f"\t\t{artifact}" for artifact in manifest.exports_for(key) or [])
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = load_settings()
    except ValidationError as exc:
        print(f"ERROR: invalid MANIPARSE_* settings: {exc}", file=sys.stderr)
        return EXIT_INVALID

    ap = argparse.ArgumentParser(prog="maniparse", description="Print a build manifest's flavors and exports")
    ap.add_argument("path", nargs="?", default=str(settings.manifest_path), help="Manifest path (default $MANIPARSE_MANIFEST or manifest.yaml)")
    ap.add_argument("--log-level", default=settings.log_level, help="Logging level (default $MANIPARSE_LOG_LEVEL or WARNING)")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        manifest = load_manifest(args.path)
        flavors = manifest.flavors()
    except ManifestReadError as exc:
        _log.debug("Manifest read failed", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_UNREADABLE
    except (ParseError, ExpansionError) as exc:
        _log.debug("Manifest rejected", exc_info=True)
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_INVALID

    print(render_report(manifest, flavors))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
