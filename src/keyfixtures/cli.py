"""
Generate the OpenPGP key table used by keystore tests.

Usage:
  keyfixtures --format go --output pkg/keystore/keystoretest/keymap.go
  keyfixtures --config keyfixtures.yaml --name example.com --name acme.com
"""

import argparse
from pathlib import Path
from typing import List, Optional

from .config import GeneratorConfig
from .crypto import SUPPORTED_ALGORITHMS
from .pipeline import run
from .render import RENDERERS
from .utils import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="keyfixtures", description="Generate OpenPGP key fixtures for keystore tests")
    parser.add_argument("--config", type=Path, help="JSON or YAML generator config.")
    parser.add_argument("--output", help="Path of the generated artifact (default: keymap.<ext> for the format).")
    parser.add_argument("--format", choices=sorted(RENDERERS), help="Output format (default: python).")
    parser.add_argument(
        "--name",
        dest="names",
        action="append",
        metavar="NAME",
        help="Identity name to generate a key for; repeat to list several. Replaces configured names.",
    )
    parser.add_argument("--algorithm", choices=SUPPORTED_ALGORITHMS, help="Primary key algorithm (default: rsa).")
    parser.add_argument("--key-size", type=int, help="RSA key size in bits (default: 2048).")
    parser.add_argument("--go-package", help="Package clause for Go output (default: keystoretest).")
    parser.add_argument(
        "--no-self-check",
        action="store_true",
        help="Skip the private key serialization check after generation.",
    )
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL env or INFO).")
    parser.add_argument("--json-logs", action="store_true", help="Emit structured JSON logs.")
    parser.add_argument("--log-file", help="Also append logs to this file.")
    return parser


def load_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge the optional config file with command-line overrides."""
    data = {}
    if args.config:
        base = GeneratorConfig.from_file(args.config)
        data = {
            "names": base.names,
            "format": base.format,
            "output": base.output,
            "go_package": base.go_package,
            "key": vars(base.key).copy(),
        }
    key = data.setdefault("key", {})
    if args.names:
        data["names"] = args.names
    if args.format:
        data["format"] = args.format
    if args.output:
        data["output"] = args.output
    if args.go_package:
        data["go_package"] = args.go_package
    if args.algorithm:
        key["algorithm"] = args.algorithm
    if args.key_size is not None:
        key["key_size"] = args.key_size
    if args.no_self_check:
        key["self_check"] = False
    return GeneratorConfig.from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        configure_logging(level=args.log_level, json_output=args.json_logs, log_file=args.log_file)
    except OSError as exc:
        configure_logging(level=args.log_level, json_output=args.json_logs)
        logger.error("Cannot open log file: %s", exc)
        return 1
    try:
        config = load_config(args)
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    result = run(config)
    if not result.ok:
        return 1
    return 0
