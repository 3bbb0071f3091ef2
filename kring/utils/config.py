"""Config access helpers shared by the ring buffer and its callers."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Mapping, Optional, TypeVar, cast

from omegaconf import DictConfig, OmegaConf

from kring.core.types import RingBufferConfig

T = TypeVar("T", bound=Optional[object])


_OPTION_NAMES = frozenset(f.name for f in dataclasses.fields(RingBufferConfig))


def get_config_value(
    config: "RingBufferConfig | Mapping[str, Any] | DictConfig | None",
    key: str,
    default: Optional[T] = None,
) -> Optional[T]:
    """Read one ring-buffer option from whichever config form was passed.

    `RingBufferConfig` is read by attribute; plain dicts and `DictConfig`
    (a `Mapping`) by key.  A missing option gives *default*.  Asking for
    an option `RingBufferConfig` does not define raises `KeyError`.
    """
    if key not in _OPTION_NAMES:
        raise KeyError(f"unknown ring buffer option {key!r}")
    if config is None:
        return default
    if isinstance(config, RingBufferConfig):
        return cast(Optional[T], getattr(config, key))
    if isinstance(config, Mapping):
        return cast(Optional[T], config.get(key, default))
    raise TypeError(f"unsupported config type {type(config).__name__}")


def load_config(source: "str | Path | Mapping[str, Any] | DictConfig | None" = None) -> DictConfig:
    """Return ring-buffer options merged over the `RingBufferConfig` defaults.

    *source* may be a YAML file path, a mapping, or an existing `DictConfig`.
    Unknown keys are rejected.
    """
    base = OmegaConf.create(dataclasses.asdict(RingBufferConfig()))
    OmegaConf.set_struct(base, True)
    if source is None:
        return base

    if isinstance(source, (str, Path)):
        override = OmegaConf.load(Path(source))
    elif isinstance(source, DictConfig):
        override = source
    else:
        override = OmegaConf.create(dict(source))
    return cast(DictConfig, OmegaConf.merge(base, override))
