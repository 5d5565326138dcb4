"""Tests for manifestgen.assembler."""

from __future__ import annotations

from manifestgen.assembler import (
    DEFAULT_DESCRIPTION,
    ManifestAssembler,
    build_context,
    doc_file_base,
    install_path,
)
from manifestgen.models import ExampleRecord
from manifestgen.rules import parse_filter_rules


def _context(**overrides):
    options = {
        "namespace": "org.qt-project.qtquick.600",
        "virtual_folder": "qtquick",
        "examples_install_path": "quick",
    }
    options.update(overrides)
    return build_context("QtQuick", **options)


def _animated_tiles() -> ExampleRecord:
    return ExampleRecord(
        name="animation/animatedtiles",
        title="Animated Tiles",
        files=["animatedtiles.cpp", "animatedtiles.qml", "main.cpp"],
    )


def test_end_to_end_tags_and_main_file() -> None:
    assembler = ManifestAssembler(build_context("QtQuick"))

    [manifest] = assembler.assemble([_animated_tiles()])
    [entry] = manifest.entries

    assert {"animated", "tiles", "qt", "quick"} <= set(entry.tags)
    assert entry.main_file is not None
    assert entry.main_file.path == "animatedtiles.qml"
    assert [item.path for item in entry.files_to_open] == ["animatedtiles.qml", "animatedtiles.cpp"]


def test_entry_attributes_are_seeded_in_order() -> None:
    example = ExampleRecord(
        name="animation/easing",
        title="Easing Curves",
        brief="Shows easing curves.",
        project_file="animation/easing/easing.pro",
        image_file="images/easing.png",
        files=["animation/easing/main.qml"],
    )
    rules = parse_filter_rules({"highlight": {"names": ["QtQuick/Easing*"], "attributes": ["isHighlighted:true", "name:Ignored"]}})

    [manifest] = ManifestAssembler(_context(), rules).assemble([example])
    [entry] = manifest.entries

    assert list(entry.attributes.items()) == [
        ("name", "Easing Curves"),
        ("docUrl", "qthelp://org.qt-project.qtquick.600/qtquick/qtquick-animation-easing-example.html"),
        ("projectPath", "quick/animation/easing/easing.pro"),
        ("imageUrl", "qthelp://org.qt-project.qtquick.600/qtquick/images/easing.png"),
        ("isHighlighted", "true"),
    ]
    assert entry.description == "Shows easing curves."
    assert [item.path for item in entry.files_to_open] == ["quick/animation/easing/main.qml"]
    assert manifest.diagnostics == []


def test_missing_expected_attributes_produce_diagnostics() -> None:
    [manifest] = ManifestAssembler(_context()).assemble([_animated_tiles()])

    messages = [(item.example, item.message) for item in manifest.diagnostics]
    assert messages == [
        ("animation/animatedtiles", "missing attribute imageUrl"),
        ("animation/animatedtiles", "missing attribute projectPath"),
    ]
    assert manifest.entries[0].description == DEFAULT_DESCRIPTION


def test_rule_supplied_expected_attribute_suppresses_diagnostic() -> None:
    rules = parse_filter_rules({"images": {"names": ["*"], "attributes": ["imageUrl:placeholder.png"]}})

    [manifest] = ManifestAssembler(_context(), rules).assemble([_animated_tiles()])

    assert [item.message for item in manifest.diagnostics] == ["missing attribute projectPath"]


def test_demos_are_routed_only_to_demos_manifest() -> None:
    examples = [
        ExampleRecord(name="demos/foo", title="Foo"),
        ExampleRecord(name="animation/bar", title="Bar"),
    ]

    manifests = ManifestAssembler(_context()).assemble(examples)

    by_category = {manifest.category: manifest for manifest in manifests}
    assert [entry.name for entry in by_category["demos"].entries] == ["Foo"]
    assert [entry.name for entry in by_category["examples"].entries] == ["Bar"]
    assert by_category["demos"].element == "demo"
    assert by_category["examples"].filename == "examples-manifest.xml"


def test_category_without_members_is_skipped() -> None:
    manifests = ManifestAssembler(_context()).assemble([ExampleRecord(name="demos/foo", title="Foo")])

    assert [manifest.category for manifest in manifests] == ["demos"]
    assert ManifestAssembler(_context()).assemble([]) == []


def test_tags_do_not_leak_between_examples() -> None:
    rules = parse_filter_rules({"one": {"names": ["QtQuick/First"], "tags": ["special"]}})
    examples = [
        ExampleRecord(name="a", title="First", meta_tags={"tag": ["shiny"]}),
        ExampleRecord(name="b", title="Second"),
    ]

    [manifest] = ManifestAssembler(_context(), rules).assemble(examples)
    first, second = manifest.entries

    assert {"special", "shiny", "first"} <= set(first.tags)
    assert set(second.tags) == {"second", "qt", "quick"}


def test_tags_are_sorted_and_cleaned() -> None:
    example = ExampleRecord(
        name="chapter1",
        title="Chapter 1: The Basics",
        meta_tags={"tag": ["(beta),Graphics"]},
    )

    [manifest] = ManifestAssembler(_context()).assemble([example])

    assert manifest.entries[0].tags == ("basics", "beta", "graphics", "qt", "quick")


def test_install_path_prefers_meta_override() -> None:
    example = ExampleRecord(name="x", title="X", meta_tags={"installpath": ["custom/dir"]})

    assert install_path(example, "quick") == "custom/dir/"
    assert install_path(ExampleRecord(name="y", title="Y"), "quick") == "quick/"
    assert install_path(ExampleRecord(name="z", title="Z")) == ""


def test_doc_file_base_normalises_characters() -> None:
    assert doc_file_base("QtQuick", ExampleRecord(name="demos/Same Game", title="")) == "qtquick-demos-same-game-example"
    assert doc_file_base("QtQuick", ExampleRecord(name="x", title="", doc_file_base="custom")) == "custom"


def test_assembly_is_deterministic() -> None:
    rules = parse_filter_rules({"all": {"names": ["*"], "attributes": ["a", "b:2"], "tags": ["z", "y"]}})
    examples = [_animated_tiles(), ExampleRecord(name="demos/clocks", title="Clocks", files=["main.qml"])]

    first = ManifestAssembler(_context(), rules).assemble(examples)
    second = ManifestAssembler(_context(), rules).assemble(examples)

    assert first == second


def test_rule_tags_are_case_normalised() -> None:
    rules = parse_filter_rules({"all": {"names": ["*"], "tags": ["Featured", "Qt"]}})
    example = ExampleRecord(name="demos/clocks", title="Clocks", files=["main.qml"])

    [manifest] = ManifestAssembler(_context(), rules).assemble([example])
    [entry] = manifest.entries

    assert entry.tags == ("clocks", "featured", "qt", "quick")
    assert all(tag == tag.lower() for tag in entry.tags)
