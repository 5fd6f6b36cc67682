"""
Render generated key records into a source artifact.

Three formats are supported:
- python: module exposing ``KEY_MAP: Dict[str, KeyDetails]``
- go: ``keymap.go`` for the Go keystore test package
- yaml: plain data document with a top-level ``keys`` mapping

Armored blocks are embedded with raw quoting (raw triple-quoted strings,
Go back-quoted strings, YAML literal blocks) so they come back verbatim.
"""

import json
from typing import Callable, Dict, Iterable, List

import yaml

from .crypto import KeyRecord
from .errors import DuplicateNameError, TemplateRenderError

DEFAULT_GO_PACKAGE = "keystoretest"

DEFAULT_OUTPUTS = {
    "python": "keymap.py",
    "go": "keymap.go",
    "yaml": "keymap.yaml",
}

PYTHON_PREAMBLE = '''# Code generated by keyfixtures. DO NOT EDIT.
"""OpenPGP key fixtures for keystore tests."""

from typing import Dict, NamedTuple


class KeyDetails(NamedTuple):
    fingerprint: str
    armored_public_key: str
    armored_private_key: str


'''

GO_PREAMBLE = """// Code generated by keyfixtures. DO NOT EDIT.

package {package}

"""

YAML_PREAMBLE = "# Code generated by keyfixtures. DO NOT EDIT.\n"


def build_table(records: Iterable[KeyRecord]) -> Dict[str, KeyRecord]:
    """Index records by name, keeping input order."""
    table: Dict[str, KeyRecord] = {}
    for record in records:
        if record.name in table:
            raise DuplicateNameError([record.name])
        table[record.name] = record
    return table


def _python_raw(value: str, field: str) -> str:
    if '"""' in value or "\\" in value or value.endswith('"'):
        raise TemplateRenderError(f"{field} cannot be embedded in a raw Python string")
    return f'r"""{value}"""'


def render_python(records: List[KeyRecord]) -> str:
    lines = [PYTHON_PREAMBLE + "KEY_MAP: Dict[str, KeyDetails] = {"]
    for record in records:
        lines.append(f"    {record.name!r}: KeyDetails(")
        lines.append(f"        fingerprint={record.fingerprint!r},")
        lines.append(
            "        armored_public_key="
            f"{_python_raw(record.armored_public_key, 'armored_public_key')},"
        )
        lines.append(
            "        armored_private_key="
            f"{_python_raw(record.armored_private_key, 'armored_private_key')},"
        )
        lines.append("    ),")
    lines.append("}")
    return "\n".join(lines) + "\n"


def _go_raw(value: str, field: str) -> str:
    # Go raw strings cannot hold back-quotes and silently drop carriage returns.
    if "`" in value or "\r" in value:
        raise TemplateRenderError(f"{field} cannot be embedded in a Go raw string")
    return f"`{value}`"


def _go_string(value: str) -> str:
    # Go string literals reject surrogate escapes, so non-ASCII text is written as UTF-8.
    if any(0xD800 <= ord(ch) <= 0xDFFF for ch in value):
        raise TemplateRenderError(f"Name {value!r} contains unpaired surrogates")
    return json.dumps(value, ensure_ascii=False)


def render_go(records: List[KeyRecord], package: str = DEFAULT_GO_PACKAGE) -> str:
    if not package.isidentifier():
        raise TemplateRenderError(f"Invalid Go package name '{package}'")
    lines = [GO_PREAMBLE.format(package=package) + "var KeyMap = map[string]*KeyDetails{"]
    for record in records:
        lines.append(f"\t{_go_string(record.name)}: &KeyDetails{{")
        lines.append(f"\t\tFingerprint: {_go_raw(record.fingerprint, 'Fingerprint')},")
        lines.append(f"\t\tArmoredPublicKey: {_go_raw(record.armored_public_key, 'ArmoredPublicKey')},")
        lines.append(f"\t\tArmoredPrivateKey: {_go_raw(record.armored_private_key, 'ArmoredPrivateKey')},")
        lines.append("\t},")
    lines.append("}")
    return "\n".join(lines) + "\n"


class _LiteralDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.Node:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_LiteralDumper.add_representer(str, _represent_str)


def render_yaml(records: List[KeyRecord]) -> str:
    document = {
        "keys": {
            record.name: {
                "fingerprint": record.fingerprint,
                "armored_public_key": record.armored_public_key,
                "armored_private_key": record.armored_private_key,
            }
            for record in records
        }
    }
    try:
        body = yaml.dump(document, Dumper=_LiteralDumper, sort_keys=False, default_flow_style=False)
    except yaml.YAMLError as exc:
        raise TemplateRenderError(f"Could not render YAML key table: {exc}") from exc
    return YAML_PREAMBLE + body


RENDERERS: Dict[str, Callable[..., str]] = {
    "python": render_python,
    "go": render_go,
    "yaml": render_yaml,
}


def render_table(records: Iterable[KeyRecord], fmt: str = "python", go_package: str = DEFAULT_GO_PACKAGE) -> str:
    """
    Render records, in order, as a single generated document.

    Raises:
        TemplateRenderError: unknown format or a value that cannot be quoted verbatim.
        DuplicateNameError: two records share a name.
    """
    if fmt not in RENDERERS:
        raise TemplateRenderError(f"Unknown output format '{fmt}'")
    ordered = list(build_table(records).values())
    if fmt == "go":
        return render_go(ordered, package=go_package)
    return RENDERERS[fmt](ordered)
