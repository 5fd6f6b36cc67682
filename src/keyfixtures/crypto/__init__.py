from .pgp import (
    KeyRecord,
    KeySettings,
    SUPPORTED_ALGORITHMS,
    fingerprint_hex,
    generate_key,
    load_armored_key,
    produce_key_record,
)

__all__ = [
    "KeyRecord",
    "KeySettings",
    "SUPPORTED_ALGORITHMS",
    "fingerprint_hex",
    "generate_key",
    "load_armored_key",
    "produce_key_record",
]
