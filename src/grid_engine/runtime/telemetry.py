"""Telemetry services built directly on telelog.

The rest of the engine only touches four names:

``configure(...)`` -- adopt an explicit config or a named preset
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component

Everything is driven by ``GRID_ENGINE_*`` environment variables so hosts can
tune logging without code changes.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "GRID_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "grid_engine")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None

_TRUTHY = {"1", "true", "yes", "on"}


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _with_profiling(config: Any) -> Any:
    config.with_profiling(True)
    return config


def _preset_config(preset: str) -> Any:
    config = tl.Config()
    key = preset.strip().lower()

    if key == "development":
        config.with_min_level("DEBUG")
        config.with_console_output(True)
        config.with_colored_output(True)
    elif key == "production":
        config.with_min_level("INFO")
        config.with_console_output(False)
        config.with_file_output(_env("LOG_FILE") or "grid_engine.log")
        config.with_buffering(True)
    elif key == "quiet":
        # Tests and embedding hosts that render their own status lines.
        config.with_min_level("ERROR")
        config.with_console_output(False)
    else:
        raise ValueError(f"Unknown telemetry preset '{preset}'.")

    return _with_profiling(config)


def _env_config() -> Any:
    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())

    console = not _env_flag("DISABLE_CONSOLE")
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR"))

    if _env_flag("LOG_JSON"):
        config.with_json_format(True)

    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)

    if _env_flag("LOG_BUFFERED"):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))

    return _with_profiling(config)


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``telelog.Config`` to adopt.
    preset:
        ``"development"``, ``"production"`` or ``"quiet"``. Mutually
        exclusive with ``config``. Without either, the ``GRID_ENGINE_PRESET``
        variable is honoured and the remaining env variables are the fallback.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    preset = preset or _env("PRESET")
    if config is None:
        config = _preset_config(preset) if preset else _env_config()

    _ACTIVE_CONFIG = _with_profiling(config)
    _LOGGER_CACHE.clear()


def _current_config() -> Any:
    global _ACTIVE_CONFIG
    if _ACTIVE_CONFIG is None:
        _ACTIVE_CONFIG = _env_config()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active config."""

    logger_name = name or DEFAULT_LOGGER_NAME
    logger = _LOGGER_CACHE.get(logger_name)
    if logger is None:
        logger = tl.Logger.with_config(logger_name, _current_config())
        _LOGGER_CACHE[logger_name] = logger
    return logger


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        return structured, True
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    method, structured = _level_method(logger, level)
    if structured:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass
class SpanHandle:
    """Yielded by ``span`` so callers can attach results to the trace."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _stringify(value)

    def _payload(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        if extra:
            payload.update({key: _stringify(val) for key, val in extra.items()})
        return payload

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", self._payload({"reason": reason}))


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block with ``logger.profile`` and optionally track a component.

    ``component=True`` reuses ``name`` as the component id; a string is used
    verbatim. ``metadata`` is pushed as logger context for the duration of
    the block and copied onto the handle.
    """

    log = get_logger(logger_name)
    if component is True:
        component_name: Optional[str] = name
    elif isinstance(component, str):
        component_name = component
    else:
        component_name = None

    pushed: list[str] = []
    serialized: Dict[str, Any] = {}
    for key, value in (metadata or {}).items():
        serialized[key] = _stringify(value)
        log.add_context(key, serialized[key])
        pushed.append(key)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=dict(serialized),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in pushed:
                log.remove_context(key)


configure()
logger = get_logger()

__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
    "logger",
]
