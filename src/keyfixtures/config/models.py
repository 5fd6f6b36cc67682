import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..crypto import KeySettings
from ..render import DEFAULT_GO_PACKAGE, DEFAULT_OUTPUTS, RENDERERS

DEFAULT_NAMES = (
    "example.com",
    "coreos.com",
    "example.com/app",
    "acme.com",
    "acme.com/services",
    "acme.com/services/web/nginx",
)

_KNOWN_KEYS = {"names", "output", "format", "go_package", "key"}


@dataclass
class GeneratorConfig:
    names: List[str] = field(default_factory=lambda: list(DEFAULT_NAMES))
    format: str = "python"
    output: Optional[str] = None
    go_package: str = DEFAULT_GO_PACKAGE
    key: KeySettings = field(default_factory=KeySettings)

    def __post_init__(self) -> None:
        if self.format not in RENDERERS:
            raise ValueError(f"Unknown output format '{self.format}'")

    @property
    def output_path(self) -> Path:
        """Destination artifact; defaults to keymap.<ext> for the format."""
        return Path(self.output or DEFAULT_OUTPUTS[self.format])

    @classmethod
    def from_file(cls, path: Path) -> "GeneratorConfig":
        path = Path(path)
        text = path.read_text()
        try:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(text) or {}
            else:
                data = json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise ValueError(f"Invalid generator config at {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Generator config at {path} must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ValueError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        names = data.get("names")
        if names is None:
            names = list(DEFAULT_NAMES)
        elif isinstance(names, str) or not isinstance(names, list):
            raise ValueError("'names' must be a list of strings")
        output = data.get("output")
        return cls(
            names=list(names),
            format=str(data.get("format", "python")),
            output=str(output) if output else None,
            go_package=str(data.get("go_package", DEFAULT_GO_PACKAGE)),
            key=KeySettings.from_mapping(data.get("key")),
        )
