"""
Phonetic equivalence table.

Sanskrit writes a word-final nasal either as the nasal consonant with virama
(म्) or as anusvara (ं); every Indic script in the table carries the same
pair. Visarga (ः) and a final स् are also treated as interchangeable in
Devanagari. Exact-form search expands a query across these pairs.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Equivalence:
    script: str
    left: str
    right: str
    # False: right -> left only replaces an occurrence at the end of the term
    right_anywhere: bool = True


NASAL_EQUIVALENCES: Tuple[Equivalence, ...] = (
    Equivalence("devanagari", "म्", "ं"),
    Equivalence("kannada", "ಮ್", "ಂ"),
    Equivalence("tamil", "ம்", "ஂ"),
    Equivalence("telugu", "మ్", "ం"),
    Equivalence("malayalam", "മ്", "ം"),
    Equivalence("bengali", "ম্", "ং"),
    Equivalence("gujarati", "મ્", "ં"),
    Equivalence("odia", "ମ୍", "ଂ"),
)

VISARGA_EQUIVALENCES: Tuple[Equivalence, ...] = (
    Equivalence("devanagari", "ः", "स्", right_anywhere=False),
)

PHONETIC_TABLE: Tuple[Equivalence, ...] = NASAL_EQUIVALENCES + VISARGA_EQUIVALENCES


def phonetic_variants(term: str, table: Tuple[Equivalence, ...] = PHONETIC_TABLE) -> List[str]:
    """Return `term` followed by its single-pair substitutions, without duplicates."""
    if not term:
        return []
    variants = [term]
    for eq in table:
        if eq.left in term:
            variants.append(term.replace(eq.left, eq.right))
        if eq.right in term:
            if eq.right_anywhere:
                variants.append(term.replace(eq.right, eq.left))
            elif term.endswith(eq.right):
                variants.append(term[: -len(eq.right)] + eq.left)
    return list(dict.fromkeys(variants))
