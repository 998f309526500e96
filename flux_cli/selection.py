"""Resolve which components to publish from flags, arguments or prompts."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from .catalogue import Catalogue, component_identifiers, flatten, group_names, merged_groups
from .prompts import Prompter

logger = logging.getLogger(__name__)


def search_options(candidates: Sequence[str], value: str) -> List[str]:
    """Case-insensitive prefix filter; a blank search returns every candidate."""
    if value == "":
        return list(candidates)

    needle = value.lower()
    return [candidate for candidate in candidates if candidate.lower().startswith(needle)]


def _restrict(identifiers: Sequence[str], selected: Iterable[str]) -> List[str]:
    wanted = set(selected)
    resolved: List[str] = []
    for identifier in identifiers:
        if identifier in wanted and identifier not in resolved:
            resolved.append(identifier)
    return resolved


def _match_arguments(identifiers: Sequence[str], components: Sequence[str]) -> List[str]:
    wanted = {component.lower() for component in components}
    matched = [identifier for identifier in identifiers if identifier.lower() in wanted]

    known = {identifier.lower() for identifier in matched}
    for component in components:
        if component.lower() not in known:
            logger.warning("Unknown component: %s", component)
    return _restrict(identifiers, matched)


def _select_groups(catalogue: Catalogue, prompter: Prompter) -> List[str]:
    groups = group_names(catalogue)
    chosen = {
        prompter.select_one(
            "Which component group would you like to publish?",
            lambda value: search_options(groups, value),
        )
    }
    return flatten(node for node in merged_groups(catalogue) if node.name in chosen)


def resolve_selection(
    catalogue: Catalogue,
    prompter: Prompter,
    components: Sequence[str] = (),
    select_all: bool = False,
    group: bool = False,
    multiple: bool = False,
) -> List[str]:
    identifiers = component_identifiers(catalogue)

    if select_all:
        return list(identifiers)

    if components:
        return _match_arguments(identifiers, components)

    if group:
        selected = _select_groups(catalogue, prompter)
    elif multiple:
        selected = prompter.select_many(
            "Which components would you like to publish?",
            lambda value: search_options(identifiers, value),
        )
    else:
        selected = [
            prompter.select_one(
                "Which component would you like to publish?",
                lambda value: search_options(identifiers, value),
            )
        ]

    return _restrict(identifiers, selected)
