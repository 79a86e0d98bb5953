"""Module de matching : scores, candidats, choix manuels."""

from fuzzyrename.matching.index import MatchIndex, MatchIndexError, select_top_k
from fuzzyrename.matching.schema import Candidate, FileEntry, Override, OverrideKind, SourceRecord
from fuzzyrename.matching.scorers import SearchAlgorithm, compare, compare_names

__all__ = [
    "Candidate",
    "FileEntry",
    "MatchIndex",
    "MatchIndexError",
    "Override",
    "OverrideKind",
    "SearchAlgorithm",
    "SourceRecord",
    "compare",
    "compare_names",
    "select_top_k",
]
