"""
Injectable locator configuration.

Locators are kept out of test logic and loaded from a YAML file that
maps logical names to Playwright selector strings. Nested mappings are
flattened into dotted names, so::

    category:
      add_tile: "xpath=/html/body/div/main/div/div/div[1]/div"

is addressed as ``category.add_tile``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml

from harness.errors import LocatorError


class LocatorMap(Mapping[str, str]):
    """Read-only mapping of logical locator names to selectors."""

    def __init__(self, selectors: Mapping[str, Any] | None = None):
        self._selectors: dict[str, str] = {}
        if selectors:
            self._flatten(selectors, prefix="")

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LocatorMap":
        """
        Load locators from a YAML file.

        Args:
            path: Location of the locator file.

        Returns:
            A populated LocatorMap.

        Raises:
            LocatorError: If the file is missing or not a mapping.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except FileNotFoundError as exc:
            raise LocatorError(f"Locator file not found: {path}") from exc
        except yaml.YAMLError as exc:
            raise LocatorError(f"Locator file {path} is not valid YAML: {exc}") from exc

        if not isinstance(data, dict):
            raise LocatorError(f"Locator file {path} must contain a mapping")
        return cls(data)

    def _flatten(self, node: Mapping[str, Any], prefix: str) -> None:
        for key, value in node.items():
            name = f"{prefix}{key}"
            if isinstance(value, Mapping):
                self._flatten(value, prefix=f"{name}.")
            elif isinstance(value, str) and value.strip():
                self._selectors[name] = value.strip()
            else:
                raise LocatorError(f"Locator '{name}' must be a non-empty selector string")

    def __getitem__(self, name: str) -> str:
        try:
            return self._selectors[name]
        except KeyError:
            raise LocatorError(f"Unknown locator '{name}'") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._selectors)

    def __len__(self) -> int:
        return len(self._selectors)

    def with_overrides(self, overrides: Mapping[str, str]) -> "LocatorMap":
        """Return a copy with some selectors replaced or added."""
        merged = LocatorMap()
        merged._selectors = {**self._selectors, **overrides}
        return merged
