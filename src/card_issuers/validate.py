"""Validate an issuers dataset file.

Run: card-issuers-validate [PATH]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .core.catalog import candidate_paths, load_catalog_file
from .core.errors import CatalogLoadError, CatalogValidationError


def _default_path() -> Optional[Path]:
    return next((path for path in candidate_paths() if path.is_file()), None)


def validate(path: Path) -> int:
    """Validate one file, report to stdout/stderr and return an exit code."""
    try:
        catalog = load_catalog_file(path)
    except CatalogValidationError as exc:
        print(f"Validation failed for {path}:\n", file=sys.stderr)
        for message in exc.errors:
            print(f"  - {message}", file=sys.stderr)
        return 1
    except CatalogLoadError as exc:
        print(f"Error reading or parsing {path}: {exc}", file=sys.stderr)
        return 1

    print(f"Validation passed: {len(catalog)} issuers validated")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Validate a stablecoin card issuers dataset.")
    parser.add_argument("path", nargs="?", type=Path, help="Dataset file (default: first known location)")
    args = parser.parse_args(argv)

    path = args.path or _default_path()
    if path is None:
        print("No issuers.json found in any known location", file=sys.stderr)
        return 1
    return validate(path)


if __name__ == "__main__":
    sys.exit(main())
