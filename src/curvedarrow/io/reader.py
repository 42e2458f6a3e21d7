"""Arrow document reader.

This module provides the ArrowReader class for loading saved arrows from JSON
and converting them into domain models.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from curvedarrow.domain import ArrowDocument
from curvedarrow.exceptions import ArrowDataError, ArrowLoadError


def parse_arrows(payload: Any) -> list[ArrowDocument]:
    """Convert a decoded JSON payload into arrow documents.

    Accepts a single arrow object, a list of arrow objects, or an object with
    an ``arrows`` list.

    Args:
        payload: Decoded JSON value

    Returns:
        List of arrow documents in file order

    Raises:
        ArrowDataError: If an arrow entry is malformed
    """
    if isinstance(payload, dict) and isinstance(payload.get("arrows"), list):
        entries = payload["arrows"]
    elif isinstance(payload, list):
        entries = payload
    else:
        entries = [payload]

    documents: list[ArrowDocument] = []
    for i, entry in enumerate(entries):
        document = ArrowDocument.from_dict(entry)
        if not document.name:
            document.name = f"Arrow {i + 1}"
        documents.append(document)
    return documents


class ArrowReader:
    """Loads saved arrow documents from a JSON file.

    Example:
        reader = ArrowReader(Path("arrows.json"))
        reader.load()
        for arrow in reader.iter_arrows():
            print(arrow.name)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the arrow reader.

        Args:
            path: Path to the JSON document
        """
        self._path = path
        self._arrows: list[ArrowDocument] | None = None

    def load(self) -> None:
        """Load and validate the document.

        Raises:
            FileNotFoundError: If the file does not exist
            ArrowLoadError: If the file is not valid JSON or holds invalid arrows
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Arrow file not found: {self._path}")

        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            raise ArrowLoadError(str(self._path), str(e)) from e
        except json.JSONDecodeError as e:
            raise ArrowLoadError(str(self._path), f"invalid JSON: {e.msg} (line {e.lineno})") from e

        try:
            self._arrows = parse_arrows(payload)
        except ArrowDataError as e:
            raise ArrowLoadError(str(self._path), str(e)) from e

    @property
    def arrow_count(self) -> int:
        """Return the number of arrows in the document.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._arrows is None:
            raise RuntimeError("Arrows not loaded. Call load() first.")

        return len(self._arrows)

    def iter_arrows(self) -> Iterator[ArrowDocument]:
        """Iterate over the loaded arrows in file order.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        if self._arrows is None:
            raise RuntimeError("Arrows not loaded. Call load() first.")

        yield from self._arrows

    def get_arrow(self, name: str) -> ArrowDocument | None:
        """Get an arrow by name, None if absent.

        Raises:
            RuntimeError: If the document has not been loaded yet
        """
        for arrow in self.iter_arrows():
            if arrow.name == name:
                return arrow
        return None

    def close(self) -> None:
        """Release the loaded arrows."""
        self._arrows = None

    def __enter__(self) -> "ArrowReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
