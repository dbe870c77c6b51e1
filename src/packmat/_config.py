"""
packmat Config - Library Configuration System

Provides property-based configuration for matrix construction and display.
Settings can be changed globally or overridden locally (per thread) with a
context manager, without threading extra arguments through every call.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

logger = logging.getLogger("packmat.config")


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class ConstructionConfig:
    """Configuration for matrix construction."""
    default: Any = 0                # Fill value when a constructor gets none
    strict_shapes: bool = field(
        default_factory=lambda: _env_flag("PACKMAT_STRICT_SHAPES", True)
    )


@dataclass
class DisplayConfig:
    """Configuration for repr / info output."""
    max_preview_rows: int = 6
    max_preview_columns: int = 6


# =============================================================================
# Global Configuration Manager
# =============================================================================

class PackmatConfig:
    """
    Global configuration manager for packmat.

    Provides thread-local configuration with context manager support.

    Example:
        # Global configuration
        packmat.config.construction.default = 0.0

        # Local configuration (context manager)
        with packmat.config.local(construction=ConstructionConfig(strict_shapes=False)):
            m = Matrix.new(2, 2).reshape(3, 3)   # padded instead of rejected

        # Back to global config
    """

    def __init__(self):
        self._global_construction = ConstructionConfig()
        self._global_display = DisplayConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

        # Callbacks for config changes
        self._callbacks: Dict[str, List[Callable]] = {
            "construction": [],
            "display": [],
        }

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def construction(self) -> ConstructionConfig:
        """Get construction configuration."""
        if getattr(self._local, "construction", None) is not None:
            return self._local.construction
        return self._global_construction

    @construction.setter
    def construction(self, value: ConstructionConfig):
        """Set global construction configuration."""
        self._global_construction = value
        self._notify("construction", value)

    @property
    def display(self) -> DisplayConfig:
        """Get display configuration."""
        if getattr(self._local, "display", None) is not None:
            return self._local.display
        return self._global_display

    @display.setter
    def display(self, value: DisplayConfig):
        """Set global display configuration."""
        self._global_display = value
        self._notify("display", value)

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def default(self) -> Any:
        """Fill value used when a constructor is given no ``default``."""
        return self.construction.default

    @default.setter
    def default(self, value: Any):
        self._global_construction.default = value
        self._notify("construction", self._global_construction)

    @property
    def strict_shapes(self) -> bool:
        """Whether reshape/from_nested/from_flat reject inconsistent shapes."""
        return self.construction.strict_shapes

    @strict_shapes.setter
    def strict_shapes(self, value: bool):
        self._global_construction.strict_shapes = bool(value)
        self._notify("construction", self._global_construction)

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (construction, display)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - set(self._callbacks)
        if unknown:
            raise TypeError(f"Unknown configuration sections: {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _swap_local(self, overrides: Dict[str, Any]) -> Dict[str, Any]:
        """Install thread-local overrides and return the ones they replace.

        A value of None clears the override for that section.
        """
        previous = {}
        for key, value in overrides.items():
            previous[key] = getattr(self._local, key, None)
            setattr(self._local, key, value)
        return previous

    # -------------------------------------------------------------------------
    # Callback Registration
    # -------------------------------------------------------------------------

    def on_change(self, config_name: str, callback: Callable):
        """
        Register callback for configuration changes.

        Args:
            config_name: Name of config ("construction" or "display")
            callback: Function to call with the new section value
        """
        if config_name in self._callbacks:
            self._callbacks[config_name].append(callback)

    def _notify(self, config_name: str, value: Any):
        """Notify callbacks of configuration change."""
        for callback in self._callbacks.get(config_name, []):
            try:
                callback(value)
            except Exception:
                logger.exception("Config callback for %r failed", config_name)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configuration to defaults."""
        self._global_construction = ConstructionConfig()
        self._global_display = DisplayConfig()
        self._local = threading.local()

        for name in self._callbacks:
            self._notify(name, getattr(self, name))

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "construction": {
                "default": self.construction.default,
                "strict_shapes": self.construction.strict_shapes,
            },
            "display": {
                "max_preview_rows": self.display.max_preview_rows,
                "max_preview_columns": self.display.max_preview_columns,
            },
        }

    def __repr__(self) -> str:
        return f"PackmatConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override.

    Contexts nest: leaving one reinstates whatever override was active in
    this thread when it was entered.
    """

    def __init__(self, config: PackmatConfig, **overrides):
        self._config = config
        self._overrides = {k: v for k, v in overrides.items() if v is not None}
        self._saved: Dict[str, Any] = {}

    def __enter__(self):
        self._saved = self._config._swap_local(self._overrides)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._swap_local(self._saved)
        self._saved = {}
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = PackmatConfig()


# =============================================================================
# Convenience Functions
# =============================================================================

def get_config() -> PackmatConfig:
    """Get the global configuration instance."""
    return config


def set_default(value: Any):
    """Set the global fill value used by constructors."""
    config.default = value


def set_strict_shapes(enabled: bool = True):
    """Enable or disable shape conservation checks globally."""
    config.strict_shapes = enabled


class _Missing:
    """Marker for an omitted ``default`` argument; None is a valid default."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


def resolve_default(default: Any) -> Any:
    """Return ``default`` or, when it was omitted, the configured fill value."""
    return config.default if default is MISSING else default


__all__ = [
    "ConstructionConfig",
    "DisplayConfig",
    "PackmatConfig",
    "config",
    "get_config",
    "set_default",
    "set_strict_shapes",
    "resolve_default",
    "MISSING",
]
