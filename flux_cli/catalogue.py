"""Component catalogue discovery and flattening.

A tier (free or pro) is a tuple of top-level nodes. Each node is either a
``Group`` holding ordered children or a ``Leaf`` naming a template file. Trees
are immutable; discovery builds one fragment per template path and folds the
fragments together with ``merge_node``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import reduce
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".jinja"
DELIMITER = "."
FREE_EXCLUDED_DIRECTORIES = frozenset({"icon"})


@dataclass(frozen=True)
class Leaf:
    name: str


@dataclass(frozen=True)
class Group:
    name: str
    children: Tuple["Node", ...] = ()


Node = Union[Group, Leaf]
Tier = Tuple[Node, ...]


@dataclass(frozen=True)
class Catalogue:
    free: Tier
    pro: Optional[Tier] = None


def fragment(segments: Sequence[str]) -> Node:
    """Build a single-branch tree for one path, e.g. ``["button", "icon"]``."""
    if not segments:
        raise ValueError("Cannot build a catalogue entry from an empty path")
    if len(segments) == 1:
        return Leaf(segments[0])
    return Group(segments[0], (fragment(segments[1:]),))


def merge_node(children: Tier, node: Node) -> Tier:
    for index, child in enumerate(children):
        if child.name != node.name or type(child) is not type(node):
            continue
        if isinstance(node, Leaf):
            return children
        merged = Group(child.name, reduce(merge_node, node.children, child.children))
        return children[:index] + (merged,) + children[index + 1 :]
    return children + (node,)


def build_tree(paths: Iterable[Sequence[str]]) -> Tier:
    return reduce(merge_node, (fragment(path) for path in paths), ())


def _component_paths(source_dir: Path, excluded: FrozenSet[str]) -> List[Tuple[str, ...]]:
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Component source directory not found: {source_dir}")

    paths: List[Tuple[str, ...]] = []
    for directory in sorted(path for path in source_dir.iterdir() if path.is_dir()):
        if directory.name in excluded:
            continue
        for candidate in sorted(directory.iterdir()):
            if not candidate.is_file() or not candidate.name.endswith(TEMPLATE_SUFFIX):
                continue
            component_name = candidate.name[: -len(TEMPLATE_SUFFIX)]
            path = candidate.parent.relative_to(source_dir).parts + (component_name,)
            if any(DELIMITER in segment for segment in path):
                logger.warning("Skipping %s: names may not contain '%s'", candidate, DELIMITER)
                continue
            paths.append(path)
    return paths


def discover_tier(source_dir: Path, excluded: FrozenSet[str] = frozenset()) -> Tier:
    paths = _component_paths(source_dir, excluded)
    logger.debug("Discovered %d components in %s", len(paths), source_dir)
    return build_tree(paths)


def discover_catalogue(
    source_dir: Path,
    pro_source_dir: Optional[Path],
    pro_available: Callable[[], bool],
) -> Catalogue:
    free = discover_tier(source_dir, FREE_EXCLUDED_DIRECTORIES)
    if not pro_available():
        return Catalogue(free=free)

    if pro_source_dir is None:
        raise RuntimeError(
            "Flux Pro is installed but its template directory could not be located. "
            "Set FLUX_PRO_SOURCE_DIR."
        )
    return Catalogue(free=free, pro=discover_tier(pro_source_dir))


def merged_groups(catalogue: Catalogue) -> List[Node]:
    """Top-level nodes of both tiers, pro replacing free on name clashes, sorted by name."""
    merged: Dict[str, Node] = {node.name: node for node in catalogue.free}
    if catalogue.pro is not None:
        merged.update((node.name, node) for node in catalogue.pro)
    return [merged[name] for name in sorted(merged)]


def flatten(nodes: Iterable[Node], prefix: Tuple[str, ...] = ()) -> List[str]:
    flat: List[str] = []
    for node in nodes:
        path = prefix + (node.name,)
        if isinstance(node, Leaf):
            flat.append(DELIMITER.join(path))
        else:
            flat.extend(flatten(node.children, path))
    return flat


def component_identifiers(catalogue: Catalogue) -> List[str]:
    return flatten(merged_groups(catalogue))


def group_names(catalogue: Catalogue) -> List[str]:
    return [node.name for node in merged_groups(catalogue)]


def template_path(identifier: str) -> Path:
    """``button.group`` -> ``button/group.jinja``."""
    segments = identifier.split(DELIMITER)
    return Path(*segments[:-1]) / f"{segments[-1]}{TEMPLATE_SUFFIX}"
