from __future__ import annotations

from dataclasses import dataclass


# Standard LRC ID tag labels
KNOWN_KEYS: frozenset[str] = frozenset(
    {"ar", "al", "ti", "au", "lr", "length", "by", "offset", "re", "tool", "ve"}
)


@dataclass(frozen=True)
class LrcOptions:
    strict: bool = True  # False: skip malformed lines instead of failing
    allow_unknown_keys: bool = True  # False: only KNOWN_KEYS accepted


DEFAULT_OPTIONS = LrcOptions()
