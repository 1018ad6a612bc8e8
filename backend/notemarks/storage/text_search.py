"""Text index matching for the document store.

Indexed text and search strings go through the same pipeline: lower-case,
split on non-word characters, drop stop words, then a light English suffix
stemmer. Plain terms are OR-combined. Quoted phrases must all be present
(case-insensitive substring) and `-term` excludes a document.
"""

import re
from dataclasses import dataclass

_WORD_RE = re.compile(r"\w+")
_PHRASE_RE = re.compile(r'"([^"]*)"')

STOP_WORDS = frozenset(
    """
    a about above after again against all am an and any are as at be because been
    before being below between both but by can did do does doing down during each
    few for from further had has have having he her here hers herself him himself
    his how i if in into is it its itself just me more most my myself no nor not
    now of off on once only or other our ours ourselves out over own same she
    should so some such than that the their theirs them themselves then there
    these they this those through to too under until up very was we were what
    when where which while who whom why will with you your yours yourself
    yourselves
    """.split()
)


def stem(word: str) -> str:
    if len(word) <= 3:
        return word
    if word.endswith("sses"):
        return word[:-2]
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("ing") and len(word) > 5:
        return word[:-3]
    if word.endswith("ed") and len(word) > 4:
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def tokenize(text: str) -> list[str]:
    return [stem(w) for w in _WORD_RE.findall(text.lower()) if w not in STOP_WORDS]


@dataclass(frozen=True)
class TextSearch:
    terms: frozenset[str]
    phrases: tuple[str, ...] = ()
    negated: frozenset[str] = frozenset()

    @classmethod
    def parse(cls, search: str) -> "TextSearch":
        phrases = tuple(p.strip().lower() for p in _PHRASE_RE.findall(search) if p.strip())
        rest = _PHRASE_RE.sub(" ", search)

        terms: set[str] = set()
        negated: set[str] = set()
        for raw in rest.split():
            if raw.startswith("-") and len(raw) > 1:
                negated.update(tokenize(raw[1:]))
            else:
                terms.update(tokenize(raw))
        # phrase words also count as terms
        for phrase in phrases:
            terms.update(tokenize(phrase))
        return cls(terms=frozenset(terms), phrases=phrases, negated=frozenset(negated))

    def matches(self, text: str) -> bool:
        tokens = set(tokenize(text))
        if tokens & self.negated:
            return False
        if self.phrases:
            lowered = text.lower()
            return all(p in lowered for p in self.phrases)
        return bool(tokens & self.terms)
