"""ContextVar-based parse configuration for adocparse.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The core never interprets most options: the safe mode is only used to tag
blocks, attribute overrides pre-seed the document attributes, and the
header/footer flag is passed through for the renderer.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from adocparse.config import ParseConfig, parse_config_context
    from adocparse.parser import Parser

    with parse_config_context(ParseConfig(safe_mode="server")):
        doc = Parser(lines).parse()

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any

from adocparse.errors import ConfigError


class SafeMode(IntEnum):
    """Security levels, ordered from least to most restrictive."""

    UNSAFE = 0
    SAFE = 1
    SERVER = 10
    SECURE = 20

    @classmethod
    def coerce(cls, value: SafeMode | str | int) -> SafeMode:
        """Resolve an enum member, member name (any case) or integer level.

        Raises:
            ConfigError: If the value names no safe mode.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        names = ", ".join(m.name.lower() for m in cls)
        raise ConfigError("safe_mode", f"{value!r} is not one of {names}")


type AttributeOverrides = Mapping[str, str | None]

_EMPTY_OVERRIDES: AttributeOverrides = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).
    Values are validated on construction, so a bad configuration fails
    before any line is processed.

    Attributes:
        safe_mode: Security level used to tag restricted blocks
        attribute_overrides: Attributes pre-seeded into every document.
            A None value pins the attribute as unset.
        header_footer: Whether the renderer should emit a full page

    """

    safe_mode: SafeMode = SafeMode.SECURE
    attribute_overrides: AttributeOverrides = field(
        default_factory=lambda: _EMPTY_OVERRIDES, hash=False
    )
    header_footer: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "safe_mode", SafeMode.coerce(self.safe_mode))
        object.__setattr__(
            self, "attribute_overrides", _freeze_overrides(self.attribute_overrides)
        )
        if not isinstance(self.header_footer, bool):
            raise ConfigError("header_footer", f"expected a bool, got {self.header_footer!r}")

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ParseConfig:
        """Create ParseConfig from a dictionary of processing options.

        Accepts ParseConfig field names as well as the short option keys
        ``safe``, ``attributes`` and ``header_footer``. Unknown keys are
        silently ignored.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "safe": "server",
            ...     "attributes": {"toc": ""},
            ...     "unknown_key": "ignored",
            ... })
            >>> config.safe_mode
            <SafeMode.SERVER: 10>

        """
        aliases = {"safe": "safe_mode", "attributes": "attribute_overrides"}
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = aliases.get(key, key)
            if name in valid_fields:
                filtered[name] = value
        return cls(**filtered)


def _freeze_overrides(value: Any) -> AttributeOverrides:
    """Normalize attribute overrides into a read-only mapping.

    Accepts a mapping, or an iterable of ``name=value`` / ``name!`` strings.
    """
    if isinstance(value, MappingProxyType):
        return value
    items: dict[str, str | None] = {}
    if isinstance(value, Mapping):
        for name, attr_value in value.items():
            if not isinstance(name, str) or not name:
                raise ConfigError("attribute_overrides", f"invalid attribute name {name!r}")
            if attr_value is not None and not isinstance(attr_value, str):
                attr_value = str(attr_value)
            items[name] = attr_value
    elif isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        for entry in value:
            if not isinstance(entry, str) or not entry:
                raise ConfigError("attribute_overrides", f"invalid attribute entry {entry!r}")
            name, sep, attr_value = entry.partition("=")
            if name.endswith("!"):
                items[name[:-1]] = None
            else:
                items[name] = attr_value if sep else ""
    else:
        raise ConfigError("attribute_overrides", f"expected a mapping, got {value!r}")
    return MappingProxyType(items)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context.
    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the module-level default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(safe_mode="unsafe")):
        ...     doc = Parser(["++++", "<b>raw</b>", "++++"]).parse()
    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "SafeMode",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
