"""
Autocomplete for the shared task input.

suggest() proposes completions for the last token of the input: filter
prefixes and live tags in search mode, keyword tables plus context hints
in create mode. apply_suggestion() splices a chosen candidate back in.
"""
import logging
import re
from typing import Iterable, Optional

from models import AppliedSuggestion, Mode, SuggestionCategory
from patterns import (
    COMMON_TAGS,
    CONTEXT_CLUSTERS,
    DATE_KEYWORDS,
    EXCLUSIVE_CATEGORIES,
    FILTER_PREFIXES,
    FILTER_VALUES,
    MAX_SUGGESTIONS,
    MIN_TOKEN_LENGTH,
    PRIORITY_KEYWORDS,
    PROJECT_KEYWORDS,
    TIME_KEYWORDS,
    WHITESPACE_RUN,
)

logger = logging.getLogger(__name__)


def _last_token(text: str) -> str:
    return text.split(" ")[-1]


def _replace_last_token(text: str, replacement: str) -> str:
    words = text.split(" ")
    words[-1] = replacement
    return " ".join(words)


def _unique(candidates: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(candidates))[:MAX_SUGGESTIONS]


def _search_suggestions(token: str, live_tags: Iterable[str]) -> list[str]:
    lower_token = token.lower()
    candidates = [name for name in FILTER_PREFIXES if lower_token in name]

    if token.startswith("#"):
        tag_query = lower_token[1:]
        candidates.extend(f"#{tag}" for tag in live_tags if tag_query in tag.lower())
    else:
        candidates.extend(f"#{tag}" for tag in live_tags if tag.lower().startswith(lower_token))
    return candidates


def _context_hints(text: str) -> list[str]:
    lower_text = text.lower()
    hints: list[str] = []
    for triggers, cluster_hints in CONTEXT_CLUSTERS:
        if any(trigger in lower_text for trigger in triggers):
            hints.extend(cluster_hints)
    return hints


def _create_suggestions(text: str, token: str) -> list[str]:
    lower_token = token.lower()
    size = len(lower_token)
    candidates: list[str] = []

    if size >= MIN_TOKEN_LENGTH["date"]:
        candidates.extend(k for k in DATE_KEYWORDS if k.startswith(lower_token))
    if size >= MIN_TOKEN_LENGTH["priority"]:
        candidates.extend(k for k in PRIORITY_KEYWORDS if lower_token in k)
    if size >= MIN_TOKEN_LENGTH["time"]:
        candidates.extend(k for k in TIME_KEYWORDS if lower_token in k)

    if token.startswith("#"):
        tag_query = lower_token[1:]
        candidates.extend(tag for tag in COMMON_TAGS if tag[1:].startswith(tag_query))
    elif size >= MIN_TOKEN_LENGTH["tag"]:
        candidates.extend(tag for tag in COMMON_TAGS if tag[1:].startswith(lower_token))

    if size >= MIN_TOKEN_LENGTH["project"]:
        candidates.extend(k for k in PROJECT_KEYWORDS if lower_token in k)

    candidates.extend(_context_hints(text))
    return candidates


def suggest(
    partial_input: str,
    mode: Mode,
    live_tags: Iterable[str] = (),
    live_project_names: Iterable[str] = (),
) -> list[str]:
    """
    Completions for the last token of partial_input, at most MAX_SUGGESTIONS,
    de-duplicated in first-seen order. An empty last token gives [].

    live_project_names is accepted for symmetry with secondary_options();
    project values are only offered once a project: prefix is chosen.
    """
    token = _last_token(partial_input)
    if not token:
        return []
    if mode == "search":
        return _unique(_search_suggestions(token, live_tags))
    return _unique(_create_suggestions(partial_input, token))


def secondary_options(prefix: str, live_project_names: Iterable[str] = ()) -> list[str]:
    """Legal values offered after a filter prefix has been picked."""
    if prefix == "project":
        return [name.lower() for name in live_project_names]
    return list(FILTER_VALUES.get(prefix, ()))


def keyword_category(candidate: str) -> Optional[str]:
    """Exclusive keyword table (priority, time or date) containing candidate, if any."""
    lower_candidate = candidate.lower()
    for category, keywords in EXCLUSIVE_CATEGORIES.items():
        if lower_candidate in keywords:
            return category
    return None


def classify_suggestion(candidate: str, mode: Mode = "create") -> SuggestionCategory:
    """Category of a candidate, derived from its shape and table membership."""
    if mode == "search" and candidate in FILTER_PREFIXES:
        return "filter-prefix"
    if candidate.startswith("#"):
        return "tag"
    return keyword_category(candidate) or "keyword"


def _remove_category_keywords(text: str, keywords: Iterable[str]) -> str:
    # Longest first so "next monday" goes before "monday" can split it
    for keyword in sorted(keywords, key=len, reverse=True):
        text = re.sub(rf"\b{re.escape(keyword)}\b", "", text, flags=re.IGNORECASE)
    return WHITESPACE_RUN.sub(" ", text).strip()


def apply_suggestion(
    current_input: str,
    chosen: str,
    mode: Mode = "create",
    live_project_names: Iterable[str] = (),
) -> AppliedSuggestion:
    """
    Merge a chosen candidate into current_input.

    Create mode priority/time/date keywords replace every keyword of the
    same category already in the text, so at most one stays active. Other
    words, including a half-typed one, are left alone. A
    search mode filter prefix becomes "prefix:" and returns its value list.
    Anything else replaces the last token. Results end with a space,
    except an open "prefix:".
    """
    if mode == "search" and chosen in FILTER_PREFIXES:
        return AppliedSuggestion(
            text=_replace_last_token(current_input, f"{chosen}:"),
            pending_prefix=chosen,
            secondary_options=secondary_options(chosen, live_project_names),
        )

    category = keyword_category(chosen) if mode == "create" else None
    if category:
        text = _remove_category_keywords(current_input, EXCLUSIVE_CATEGORIES[category])
        logger.debug("Applied %s keyword %r", category, chosen)
        return AppliedSuggestion(text=f"{text} {chosen} " if text else f"{chosen} ")

    return AppliedSuggestion(text=_replace_last_token(current_input, chosen) + " ")


def apply_secondary_option(current_input: str, prefix: str, option: str) -> str:
    """Complete an open "prefix:" token with option."""
    return _replace_last_token(current_input, f"{prefix}:{option}") + " "
