"""
Repository registry for gyros.

Turns the configured alias -> path mapping into RepositoryEntry objects
and narrows them with the --only selector.

Matching policy for --only is exact: the needle is reduced to its final
path component (so `--only=../svc-a/` selects `svc-a`) and compared with
each alias for equality. Substrings never match; close aliases are only
offered as suggestions in the NotFoundError message.
"""

import logging
from typing import Iterable, List, Mapping

from rapidfuzz import fuzz, process

from .config import alias_from_path
from .domain.repository import RepositoryEntry
from .exit_codes import ConfigError, NotFoundError

logger = logging.getLogger(__name__)

SUGGESTION_THRESHOLD = 60
MAX_SUGGESTIONS = 3


def load(mapping: Mapping[str, str]) -> List[RepositoryEntry]:
    """
    Build the ordered repository set from an alias -> path mapping.

    Args:
        mapping: Already-deserialized alias -> path pairs

    Returns:
        One RepositoryEntry per key, in mapping order

    Raises:
        ConfigError: If the mapping is empty
    """
    if not mapping:
        raise ConfigError("No repos found in config")

    entries = [RepositoryEntry(alias=alias, path=path) for alias, path in mapping.items()]
    logger.debug(f"Loaded {len(entries)} repositories: {', '.join(e.alias for e in entries)}")
    return entries


def filter_by_alias(entries: Iterable[RepositoryEntry], needle: str) -> List[RepositoryEntry]:
    """
    Select the entries whose alias equals the normalized needle.

    Raises:
        NotFoundError: If nothing matches
    """
    entries = list(entries)
    name = alias_from_path(needle)
    selected = [entry for entry in entries if name and entry.alias == name]

    if not selected:
        message = f"Couldn't find the repo named '{needle}'"
        suggestions = suggest_aliases(entries, name)
        if suggestions:
            message += f" (did you mean: {', '.join(suggestions)}?)"
        raise NotFoundError(message)

    logger.debug(f"--only {needle!r} selected {len(selected)} repositories")
    return selected


def suggest_aliases(entries: Iterable[RepositoryEntry], name: str) -> List[str]:
    """Aliases that look like `name`, best first."""
    aliases = [entry.alias for entry in entries]
    if not name or not aliases:
        return []
    matches = process.extract(
        name,
        aliases,
        scorer=fuzz.ratio,
        processor=str.lower,
        limit=MAX_SUGGESTIONS,
        score_cutoff=SUGGESTION_THRESHOLD,
    )
    return [alias for alias, _score, _index in matches]
