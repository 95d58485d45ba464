from localshortener.registry import ShortcodeRegistry, build_registry


__all__ = [
    'ShortcodeRegistry',
    'build_registry',
]
