from __future__ import annotations
from dataclasses import dataclass, fields
from typing import Any, Mapping

CASE_SENSITIVE: bool = False
CONTEXT_LENGTH: int = 50          # codepoints captured on each side of a match
ENABLE_SANDHI: bool = True
MAX_RESULTS: int = 100            # 0 disables the cap
HIGHLIGHT_CLASS: str = "search-highlight"

# Pratika stems shorter than this are rejected as likely false positives
MIN_STEM_LENGTH: int = 2

# Text unit for the corpus loader: "file", "line", or "paragraph"
TEXT_UNIT: str = "line"

# /* ~~~ camelCase option names accepted from JSON / browser callers ~~~ */
_CAMEL_ALIASES = {
    "caseSensitive": "case_sensitive",
    "contextLength": "context_length",
    "enableSandhi": "enable_sandhi",
    "maxResults": "max_results",
    "highlightClass": "highlight_class",
}


@dataclass(frozen=True)
class SearchConfig:
    case_sensitive: bool = CASE_SENSITIVE
    context_length: int = CONTEXT_LENGTH
    enable_sandhi: bool = ENABLE_SANDHI
    max_results: int = MAX_RESULTS
    highlight_class: str = HIGHLIGHT_CLASS

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "SearchConfig":
        """Build a config from snake_case or camelCase options; unknown keys are ignored."""
        if not options:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value
        return cls(**kwargs)
