from ..crypto import KeySettings
from .models import DEFAULT_NAMES, GeneratorConfig

__all__ = ["DEFAULT_NAMES", "GeneratorConfig", "KeySettings"]
