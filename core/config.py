"""
zcatr Configuration
Single source of truth for all settings.
Defaults are built in; the CLI overrides them per invocation.
"""
import copy
from typing import List


# Default config values
DEFAULTS = {
    "sniff": {
        "prefix_size": 512
    },
    "stream": {
        "chunk_size_kb": 8
    },
    "preview": {
        "text_extensions": ["txt", "md", "csv", "json", "xml"],
        "unavailable_message": "Preview not available in console."
    },
    "output": {
        "styling": True,
        "separator_width": 40
    }
}


class ZcatConfig:
    def __init__(self, overrides: dict = None):
        self._config = self._deep_copy(DEFAULTS)
        if overrides:
            self._deep_merge(self._config, overrides)

    def get(self, *keys, default=None):
        """
        Get a nested config value by key path.
        e.g. config.get('stream', 'chunk_size_kb')
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, *keys_and_value):
        """
        Set a nested config value.
        e.g. config.set('output', 'styling', False)
        """
        *keys, value = keys_and_value
        target = self._config
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value

    # ── Convenience properties ─────────────────────────────────────────────

    @property
    def prefix_size(self) -> int:
        return self.get('sniff', 'prefix_size', default=512)

    @property
    def chunk_size(self) -> int:
        return self.get('stream', 'chunk_size_kb', default=8) * 1024

    @property
    def text_extensions(self) -> List[str]:
        return self.get('preview', 'text_extensions', default=[])

    @property
    def unavailable_message(self) -> str:
        return self.get(
            'preview', 'unavailable_message',
            default='Preview not available in console.'
        )

    @property
    def styling(self) -> bool:
        return self.get('output', 'styling', default=True)

    @property
    def separator_width(self) -> int:
        return self.get('output', 'separator_width', default=40)

    # ── Helpers ────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_copy(d: dict) -> dict:
        return copy.deepcopy(d)

    @staticmethod
    def _deep_merge(base: dict, override: dict):
        """Merge override into base recursively, in place"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                ZcatConfig._deep_merge(base[key], value)
            else:
                base[key] = value


# Singleton, import this everywhere
config = ZcatConfig()

__all__ = ["ZcatConfig", "config", "DEFAULTS"]
