"""Resolver configuration.

Options come from the ``resolver:`` section of layered YAML settings files:

```yaml
resolver:
  resolveAmbientRefs: false
  types:
    - node
  typings:
    angular2: ./typings/angular2.d.ts
    rxjs: true
```

Scope priority (most specific wins):
1. local (.tsdeps/settings.local.yaml) - gitignored, machine-specific
2. project (.tsdeps/settings.yaml) - committed, team-shared
3. global (~/.tsdeps/settings.yaml) - user defaults
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

logger = logging.getLogger(__name__)


class ResolverOptions(BaseModel):
    """Options consulted by the resolution engine."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    resolve_ambient_refs: bool = Field(
        default=False,
        alias="resolveAmbientRefs",
        description="Resolve bare reference paths as modules instead of relative to the referencing file",
    )
    types: list[str] = Field(
        default_factory=list, description="Specifiers eligible for @types lookup"
    )
    typings: dict[str, Any] = Field(
        default_factory=dict,
        description="Per-package typings overrides (true or a package-relative path)",
    )

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> ResolverOptions:
        """Build options from a merged settings dictionary.

        Args:
            settings: Settings dictionary (the ``resolver`` key is used)

        Returns:
            ResolverOptions instance
        """
        return cls.model_validate(settings.get("resolver") or {})


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        return cls(
            global_settings=Path.home() / ".tsdeps" / "settings.yaml",
            project_settings=Path.cwd() / ".tsdeps" / "settings.yaml",
            local_settings=Path.cwd() / ".tsdeps" / "settings.local.yaml",
        )

    def in_priority_order(self) -> list[Path]:
        """Least specific first."""
        return [self.global_settings, self.project_settings, self.local_settings]


def load_settings(paths: SettingsPaths | None = None) -> dict[str, Any]:
    """Load and deep-merge settings from all scopes. Malformed files are skipped."""
    paths = paths or SettingsPaths.default()
    result: dict[str, Any] = {}
    for path in paths.in_priority_order():
        if not path.exists():
            continue
        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"[config] skipping unreadable settings file {path}: {e}")
            continue
        if not isinstance(content, dict):
            logger.warning(f"[config] skipping {path}: top level is not a mapping")
            continue
        result = _deep_merge(result, content)
    return result


def load_options(paths: SettingsPaths | None = None) -> ResolverOptions:
    """Load resolver options from the layered settings files."""
    options = ResolverOptions.from_settings(load_settings(paths))
    logger.debug(
        f"[config] resolve_ambient_refs={options.resolve_ambient_refs} "
        f"types={options.types} typings={sorted(options.typings)}"
    )
    return options


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, overlay wins."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
