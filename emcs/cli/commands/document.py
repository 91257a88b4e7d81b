"""Document hashing commands."""

import json
import sys
from pathlib import Path
from typing import Any

import cyclopts

from emcs.cli.console import get_console
from emcs.domain.notarization.service.canonical import compute_hash

app = cyclopts.App(name="document", help="Hash and verify e-AD documents")


def _load(path: Path) -> Any:
    console = get_console()
    if not path.exists():
        console.error(f"File not found: {path}")
        sys.exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.error(f"Invalid JSON in {path}: {e}")
        sys.exit(1)


@app.command
def hash(path: Path) -> None:
    """Print the canonical hash of a JSON document.

    Args:
        path: JSON file containing the document.
    """
    get_console().print(compute_hash(_load(path)))


@app.command
def verify(path: Path, expected_hash: str) -> None:
    """Check a JSON document against a previously notarized hash.

    Args:
        path: JSON file containing the document.
        expected_hash: Hash recorded at dispatch time (0x-prefixed).
    """
    console = get_console()
    actual = compute_hash(_load(path))
    if actual == expected_hash:
        console.success("Document matches the notarized hash")
        return
    console.error("Document does not match", hint=f"Computed {actual}")
    sys.exit(1)
