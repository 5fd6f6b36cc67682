"""
Three-phase generation run: validate names, generate one key per name,
render the table once. The first failure stops the run and is returned
to the caller instead of exiting the process.
"""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .config import GeneratorConfig
from .crypto import KeyRecord, KeySettings, produce_key_record
from .errors import KeyFixtureError, OutputWriteError
from .identity import derive_identity, validate_names
from .render import DEFAULT_GO_PACKAGE, build_table, render_table
from .utils import CleanupManager, get_logger, remove_file

logger = get_logger(__name__)

ARTIFACT_MODE = 0o644


@dataclass
class GenerationResult:
    records: List[KeyRecord] = field(default_factory=list)
    text: Optional[str] = None
    path: Optional[Path] = None
    error: Optional[KeyFixtureError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def table(self) -> Dict[str, KeyRecord]:
        return build_table(self.records)


def build_key_table(
    names: Iterable[str],
    settings: Optional[KeySettings] = None,
    fmt: str = "python",
    go_package: str = DEFAULT_GO_PACKAGE,
) -> GenerationResult:
    """Generate key material for every name and render the table in memory."""
    settings = settings or KeySettings()
    try:
        ordered = validate_names(names)
        logger.info("Generating %d %s key(s)", len(ordered), settings.algorithm)
        identities = [derive_identity(name, settings.display_name) for name in ordered]
        records = [
            produce_key_record(name, settings, identity)
            for name, identity in zip(ordered, identities)
        ]
        text = render_table(records, fmt=fmt, go_package=go_package)
    except KeyFixtureError as exc:
        logger.error("Key table generation failed: %s", exc)
        return GenerationResult(error=exc)
    return GenerationResult(records=records, text=text)


def write_artifact(path: Union[str, Path], text: str) -> Path:
    """
    Atomically replace ``path`` with ``text``.

    The content goes to a temporary file in the destination directory first,
    so a failed write never leaves a truncated artifact behind.

    Raises:
        OutputWriteError: if the directory or file cannot be written.
    """
    path = Path(path)
    with CleanupManager() as cleanup:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
            cleanup.register(remove_file(tmp_name))
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(text)
            os.chmod(tmp_name, ARTIFACT_MODE)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise OutputWriteError(str(path), exc) from exc
    return path


def run(config: GeneratorConfig) -> GenerationResult:
    """Generate the configured key table and write it to the output path."""
    result = build_key_table(config.names, config.key, fmt=config.format, go_package=config.go_package)
    if not result.ok:
        return result
    try:
        result.path = write_artifact(config.output_path, result.text or "")
    except OutputWriteError as exc:
        logger.error("%s", exc)
        result.error = exc
        return result
    logger.info("Wrote %d key(s) to %s", len(result.records), result.path)
    return result
