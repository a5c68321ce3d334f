"""Defaults for prune task execution."""

from __future__ import annotations

from dataclasses import dataclass

from kprune.domain.taskrunner import DEFAULT_EVENT_BUFFER

from .env import env_number
from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class PruneConfig:
    event_buffer: int = DEFAULT_EVENT_BUFFER


def get_prune_config() -> PruneConfig:
    event_buffer = env_number("KPRUNE_EVENT_BUFFER", default=DEFAULT_EVENT_BUFFER, cast=int)
    if event_buffer < 1:
        raise ConfigurationError("KPRUNE_EVENT_BUFFER must be at least 1")
    return PruneConfig(event_buffer=event_buffer)
