from localshortener.registry.shortcode_registry import ShortcodeRegistry
from localshortener.registry.factory import build_registry


__all__ = [
    'ShortcodeRegistry',
    'build_registry',
]
