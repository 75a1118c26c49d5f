"""Load operator configuration from ingress2haproxy.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class TemplateConfig:
    """Which HAProxy template to render; empty means the packaged one."""

    path: str = ""


@dataclass
class OutputConfig:
    """Where to write the rendered configuration; empty means stdout."""

    path: str = ""


@dataclass
class SnapshotConfig:
    """Ingress snapshot source and controller defaults.

    default_ssl_redirect applies to locations that do not declare a
    redirect policy.
    """

    path: str = ""
    default_ssl_redirect: bool = True


@dataclass
class ControllerConfig:
    """Full configuration loaded from ingress2haproxy.toml.

    overrides holds the operator settings merged onto the render
    configuration. Values are kept as strings whatever their TOML type,
    they are parsed by derivations.overrides.
    """

    template: TemplateConfig = field(default_factory=TemplateConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    snapshot: SnapshotConfig = field(default_factory=SnapshotConfig)
    overrides: dict[str, str] = field(default_factory=dict)


def _override_value(value: object) -> str:
    """Render a TOML scalar the way it would appear in a ConfigMap."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _build_overrides(data: dict) -> dict[str, str]:
    """Build the override map from the [overrides] table."""
    return {
        str(k): _override_value(v)
        for k, v in data.get("overrides", {}).items()
    }


def _build_snapshot(data: dict) -> SnapshotConfig:
    section = data.get("snapshot", {})
    return SnapshotConfig(
        path=section.get("path", ""),
        default_ssl_redirect=section.get("default_ssl_redirect", True),
    )


def load_config(config_path: Path | str | None = None) -> ControllerConfig:
    """Load configuration from a TOML file.

    If config_path is None, looks for ingress2haproxy.toml in the current
    directory.
    """
    if config_path is None:
        config_path = Path("ingress2haproxy.toml")
    else:
        config_path = Path(config_path)

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    return ControllerConfig(
        template=TemplateConfig(path=data.get("template", {}).get("path", "")),
        output=OutputConfig(path=data.get("output", {}).get("path", "")),
        snapshot=_build_snapshot(data),
        overrides=_build_overrides(data),
    )
