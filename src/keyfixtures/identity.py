"""Derive the OpenPGP user identity embedded in each fixture key."""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List

from .errors import DuplicateNameError, InvalidNameError

DEFAULT_DISPLAY_NAME = "signer"


@dataclass(frozen=True)
class Identity:
    """User ID parts for one generated key."""
    display_name: str
    comment: str
    email: str


def first_path_segment(name: str) -> str:
    return name.split("/")[0]


def derive_identity(name: str, display_name: str = DEFAULT_DISPLAY_NAME) -> Identity:
    """
    Map a slash-qualified name such as ``acme.com/services/web/nginx`` to
    ``signer <signer@acme.com>`` with comment ``"<name> Signing Key"``.
    """
    return Identity(
        display_name=display_name,
        comment=f"{name} Signing Key",
        email=f"signer@{first_path_segment(name)}",
    )


def validate_names(names: Iterable[str]) -> List[str]:
    """
    Check the input list before any key is generated.

    Returns the names as a list in input order.

    Raises:
        InvalidNameError: if a name is empty or has an empty first segment.
        DuplicateNameError: if a name appears more than once.
    """
    result = list(names)
    for name in result:
        if not isinstance(name, str) or not name:
            raise InvalidNameError(f"Identity name must be a non-empty string, got {name!r}")
        if not first_path_segment(name):
            raise InvalidNameError(f"Identity name '{name}' has an empty first path segment")
    duplicates = [name for name, count in Counter(result).items() if count > 1]
    if duplicates:
        raise DuplicateNameError(duplicates)
    return result
