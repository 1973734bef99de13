"""Disposable fuzzy search index over catalog entries."""

from collections import defaultdict
from collections.abc import Iterable

from rapidfuzz.distance import JaroWinkler

from photocatalog.core.modules.catalog.models import MetadataWithName

SEARCH_THRESHOLD = 0.8
SEARCH_STOP_WORDS = ("-", "_", ".")
SEARCH_LIMIT = 30


def searchable_text(entry: MetadataWithName) -> str:
    return "\n".join([entry.name, entry.description, *sorted(entry.tags)])


def tokenize(text: str, stop_words: Iterable[str] = SEARCH_STOP_WORDS) -> list[str]:
    """Lowercase, split on whitespace, then split on every stop word.

    >>> tokenize("Golden-Gate bridge_2020.jpg")
    ['golden', 'gate', 'bridge', '2020', 'jpg']
    """
    tokens = text.lower().split()
    for stop_word in stop_words:
        tokens = [part for token in tokens for part in token.split(stop_word)]
    return [token for token in tokens if token]


class SearchIndex:
    """Token index with Jaro-Winkler matching.

    Each query token is compared with every indexed token; matches scoring
    at or above the threshold add their score to every entry containing that token.
    """

    def __init__(self, threshold: float = SEARCH_THRESHOLD, stop_words: Iterable[str] = SEARCH_STOP_WORDS) -> None:
        self._threshold = threshold
        self._stop_words = tuple(stop_words)
        self._entries: list[MetadataWithName] = []
        self._postings: dict[str, set[int]] = defaultdict(set)

    @classmethod
    def build(cls, entries: Iterable[MetadataWithName]) -> "SearchIndex":
        index = cls()
        for entry in entries:
            index.insert(entry)
        return index

    def insert(self, entry: MetadataWithName) -> None:
        position = len(self._entries)
        self._entries.append(entry)
        for token in tokenize(searchable_text(entry), self._stop_words):
            self._postings[token].add(position)

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> list[MetadataWithName]:
        """Return entries ranked by descending score, at most limit of them."""
        token_scores: dict[str, float] = {}
        for query_token in tokenize(query, self._stop_words):
            for token in self._postings:
                score = JaroWinkler.similarity(token, query_token)
                if score >= self._threshold:
                    token_scores[token] = max(score, token_scores.get(token, 0.0))

        entry_scores: dict[int, float] = defaultdict(float)
        for token, score in token_scores.items():
            for position in self._postings[token]:
                entry_scores[position] += score

        # Equal scores keep insertion order
        ranked = sorted(entry_scores, key=lambda position: (-entry_scores[position], position))
        return [self._entries[position] for position in ranked[:limit]]
