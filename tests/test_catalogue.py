import logging
from pathlib import Path

import pytest

from flux_cli.catalogue import (
    Catalogue,
    Group,
    Leaf,
    build_tree,
    component_identifiers,
    discover_catalogue,
    discover_tier,
    flatten,
    group_names,
    template_path,
)


def _write(root: Path, relative: str, content: str = "<div></div>") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_discover_tier_builds_groups_from_directories(tmp_path: Path):
    _write(tmp_path, "button/icon.jinja")
    _write(tmp_path, "button/group.jinja")
    _write(tmp_path, "card/header.jinja")
    _write(tmp_path, "card/README.md")
    _write(tmp_path, "stray.jinja")

    tier = discover_tier(tmp_path)
    assert tier == (
        Group("button", (Leaf("group"), Leaf("icon"))),
        Group("card", (Leaf("header"),)),
    )


def test_names_containing_dots_are_skipped(tmp_path: Path, caplog):
    _write(tmp_path, "button/icon.v2.jinja")
    _write(tmp_path, "button/index.jinja")
    _write(tmp_path, "legacy.v1/card.jinja")

    with caplog.at_level(logging.WARNING, logger="flux_cli.catalogue"):
        tier = discover_tier(tmp_path)

    assert flatten(tier) == ["button.index"]
    assert [identifier.split(".") for identifier in flatten(tier)] == [["button", "index"]]
    assert "icon.v2.jinja" in caplog.text
    assert "card.jinja" in caplog.text


def test_free_tier_skips_icon_directory_but_pro_does_not(tmp_path: Path):
    free = tmp_path / "free"
    pro = tmp_path / "pro"
    _write(free, "icon/chevron-down.jinja")
    _write(free, "lexicon/entry.jinja")
    _write(pro, "icon/sparkles.jinja")

    catalogue = discover_catalogue(free, pro, pro_available=lambda: True)
    assert flatten(catalogue.free) == ["lexicon.entry"]
    assert flatten(catalogue.pro) == ["icon.sparkles"]


def test_pro_tier_ignored_when_not_installed(tmp_path: Path):
    _write(tmp_path / "free", "button/index.jinja")

    catalogue = discover_catalogue(tmp_path / "free", tmp_path / "missing", pro_available=lambda: False)
    assert catalogue.pro is None


def test_missing_source_directory_raises(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        discover_catalogue(tmp_path / "nope", None, pro_available=lambda: False)


def test_pro_installed_without_directory_raises(tmp_path: Path):
    _write(tmp_path, "button/index.jinja")
    with pytest.raises(RuntimeError):
        discover_catalogue(tmp_path, None, pro_available=lambda: True)


def test_build_tree_merges_shared_prefixes_without_duplicates():
    tree = build_tree(
        [
            ("button", "icon"),
            ("navlist", "group", "item"),
            ("button", "icon"),
            ("navlist", "group", "heading"),
            ("button", "group"),
        ]
    )
    assert tree == (
        Group("button", (Leaf("icon"), Leaf("group"))),
        Group("navlist", (Group("group", (Leaf("item"), Leaf("heading"))),)),
    )


def test_flatten_then_split_reconstructs_paths():
    paths = [("button", "icon"), ("navlist", "group", "item"), ("card", "header")]
    tree = build_tree(paths)

    assert [tuple(identifier.split(".")) for identifier in flatten(tree)] == paths
    assert flatten(build_tree(identifier.split(".") for identifier in flatten(tree))) == flatten(tree)


def test_flatten_is_noop_on_flat_structure():
    flat = flatten(build_tree([("button", "icon"), ("card", "header")]))
    leaves = [Leaf(identifier) for identifier in flat]
    assert flatten(leaves) == flat
    assert flatten([Leaf(identifier) for identifier in flatten(leaves)]) == flat


def test_pro_groups_replace_free_groups_and_keys_are_sorted():
    catalogue = Catalogue(
        free=(Group("card", (Leaf("header"),)), Group("button", (Leaf("icon"),))),
        pro=(Group("button", (Leaf("icon"), Leaf("split"))), Group("accordion", (Leaf("item"),))),
    )

    assert group_names(catalogue) == ["accordion", "button", "card"]
    assert component_identifiers(catalogue) == [
        "accordion.item",
        "button.icon",
        "button.split",
        "card.header",
    ]


def test_template_path_converts_dots_to_directories():
    assert template_path("button.group") == Path("button") / "group.jinja"
    assert template_path("navlist.group.item") == Path("navlist") / "group" / "item.jinja"
