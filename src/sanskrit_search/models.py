"""
Value objects shared by the pratika engine, the sandhi tables and the search
engine.

Everything here is created per call and never mutated afterwards; the rule
tables that produce them live in their own modules.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class MatchType(str, Enum):
    EXACT = "exact"
    DIRECT = "direct"
    SANDHI = "sandhi"
    PRATIKA_GRAHANA = "pratika-grahana"


@dataclass(frozen=True)
class PratikaAnalysis:
    """
    Result of classifying one text span.

    Attributes
    ----------
    original_text : str
        The trimmed, NFC-normalized input.
    is_pratika : bool
        True when the span ends in an iti-class quotation suffix that could be
        reversed into a stem of at least two codepoints.
    stem : str | None
        The reconstructed base form (NFC); None unless ``is_pratika``.
    rule_id : str | None
        Identifier of the suffix rule that fired, e.g. ``"bhiriti-visarga"``.
    description : str
        Human-readable rationale, also used to tell rejections apart.
    iti_ending : str | None
        The literal suffix consumed from the input.
    confidence : int
        0-100; 0 for every rejection.
    """
    original_text: str
    is_pratika: bool
    stem: Optional[str] = None
    rule_id: Optional[str] = None
    description: str = ""
    iti_ending: Optional[str] = None
    confidence: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "originalText": self.original_text,
            "isPratika": self.is_pratika,
            "stem": self.stem,
            "ruleId": self.rule_id,
            "description": self.description,
            "itiEnding": self.iti_ending,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class SandhiRule:
    """
    One row of the pratika suffix table.

    ``guard`` receives the text preceding ``match_suffix`` and decides whether
    this row applies; rows without a guard always apply once the suffix matches.
    ``strip`` is how many trailing codepoints ``reconstruct`` drops; it defaults
    to the length of ``match_suffix`` and differs on a few rows of the table.
    """
    match_suffix: str
    reconstructed_suffix: str
    rule_id: str
    description: str
    confidence: int
    guard: Optional[Callable[[str], bool]] = field(default=None, compare=False)
    strip: Optional[int] = None

    def matches(self, text: str) -> bool:
        if not text.endswith(self.match_suffix):
            return False
        if self.guard is None:
            return True
        return self.guard(text[: len(text) - len(self.match_suffix)])

    def reconstruct(self, text: str) -> str:
        cut = len(self.match_suffix) if self.strip is None else self.strip
        return text[: len(text) - cut] + self.reconstructed_suffix


@dataclass(frozen=True)
class Variant:
    text: str
    rule_id: str


@dataclass(frozen=True)
class MatchContext:
    before: str
    match: str
    after: str
    full: str

    def to_dict(self) -> Dict[str, str]:
        return {"before": self.before, "match": self.match, "after": self.after, "full": self.full}


@dataclass(frozen=True)
class SearchMatch:
    position: int             # codepoint offset into the NFC text
    length: int
    matched_text: str
    context: MatchContext
    type: MatchType
    source_rule_id: Optional[str] = None
    original_term: Optional[str] = None
    variant: Optional[str] = None

    @property
    def key(self) -> tuple[int, int]:
        return (self.position, self.length)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "position": self.position,
            "length": self.length,
            "matchedText": self.matched_text,
            "context": self.context.to_dict(),
            "type": self.type.value,
        }
        if self.source_rule_id is not None:
            out["sourceRuleId"] = self.source_rule_id
        if self.original_term is not None:
            out["originalTerm"] = self.original_term
        if self.variant is not None:
            out["variant"] = self.variant
        return out


@dataclass(frozen=True)
class SearchResult:
    matches: List[SearchMatch]
    count: int
    search_term: str = ""
    timestamp: int = 0        # ms since the epoch

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": [m.to_dict() for m in self.matches],
            "count": self.count,
            "searchTerm": self.search_term,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Document:
    id: str
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def coerce(cls, obj: Any) -> "Document":
        """Accept a Document or a {id, text, metadata} mapping."""
        if isinstance(obj, Document):
            return obj
        return cls(
            id=str(obj.get("id", "")),
            text=obj.get("text") or "",
            metadata=dict(obj.get("metadata") or {}),
        )


@dataclass(frozen=True)
class DocumentResult:
    id: str
    metadata: Dict[str, Any]
    result: SearchResult

    @property
    def count(self) -> int:
        return self.result.count

    def to_dict(self) -> Dict[str, Any]:
        out = {"id": self.id, "metadata": dict(self.metadata)}
        out.update(self.result.to_dict())
        return out
