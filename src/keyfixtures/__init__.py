"""
OpenPGP key fixture generator for keystore test suites.

Pipeline:
- Identity derivation from slash-qualified names
- Key generation and armored export (PGPy)
- Table rendering as Python, Go or YAML source
"""

__all__ = ["config", "crypto", "errors", "identity", "pipeline", "render", "utils"]
