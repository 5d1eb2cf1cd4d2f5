"""Tests for gopkgdoc.classifier."""

from __future__ import annotations

import pytest

from gopkgdoc.classifier import comment_text, is_exported


@pytest.mark.parametrize(
    ("comments", "expected"),
    [
        (["// Hello."], "Hello.\n"),
        (["//Tight."], "Tight.\n"),
        (["// One.", "//", "//", "// Two."], "One.\n\nTwo.\n"),
        (["//go:generate stringer -type=Color", "// Color is a hue."], "Color is a hue.\n"),
        (["//line foo.go:10"], ""),
        (["/*\n Block text.\n*/"], " Block text.\n"),
        (["//   indented  "], "  indented\n"),
        ([], ""),
    ],
)
def test_comment_text(comments, expected) -> None:
    assert comment_text(comments) == expected


def test_is_exported() -> None:
    assert is_exported("Name")
    assert not is_exported("name")
    assert not is_exported("_")
    assert not is_exported("")


def test_classify_partitions_declarations(package_builder) -> None:
    package_builder.write(
        {
            "demo.go": """
            // Package demo shows classification.
            package demo

            import "fmt"

            // Limit bounds things.
            const Limit = 10

            // Verbose toggles output.
            var Verbose = false

            // Hello prints a greeting.
            func Hello() { fmt.Println("hi") }

            // Greeter greets.
            type Greeter struct{}

            // Greet greets.
            func (g *Greeter) Greet() {}
            """,
        }
    )

    _, model = package_builder.classify()

    assert model.name == "demo"
    assert model.doc == "Package demo shows classification."
    assert [group.names for group in model.consts] == [["Limit"]]
    assert model.consts[0].doc == "Limit bounds things.\n"
    assert [group.names for group in model.vars] == [["Verbose"]]
    assert [func.name for func in model.funcs] == ["Hello"]
    assert model.funcs[0].doc == "Hello prints a greeting.\n"

    greeter = model.types["Greeter"]
    assert greeter.doc == "Greeter greets.\n"
    assert not greeter.synthesized
    assert [(func.name, func.recv) for func in greeter.funcs] == [("Greet", "Greeter")]


def test_methods_never_appear_as_package_functions(package_builder) -> None:
    package_builder.write(
        {
            "a.go": """
            package demo

            func (s Store) Get() {}

            func New() Store { return Store{} }
            """,
            "b.go": """
            package demo

            type Store struct{}

            func (s *Store) Put() {}

            func (s Store[K]) Keys() {}
            """,
        }
    )

    _, model = package_builder.classify()

    assert [func.name for func in model.funcs] == ["New"]
    assert all(not func.recv for func in model.funcs)
    assert [func.name for func in model.types["Store"].funcs] == ["Get", "Put", "Keys"]


def test_types_keep_first_seen_order(package_builder) -> None:
    package_builder.write(
        {
            "a.go": """
            package demo

            type Zeta int

            func (b Beta) Run() {}

            type Alpha int

            type Beta int
            """,
        }
    )

    _, model = package_builder.classify()

    assert list(model.types) == ["Zeta", "Beta", "Alpha"]
    assert model.types["Beta"].decl is not None


def test_method_on_undeclared_type_synthesizes_entry(package_builder) -> None:
    package_builder.write(
        {
            "a.go": """
            package demo

            // M does things.
            func (t T) M() {}
            """,
        }
    )

    _, model = package_builder.classify()

    entry = model.types["T"]
    assert entry.synthesized
    assert entry.doc == ""
    assert [func.doc for func in entry.funcs] == ["M does things.\n"]
    assert model.funcs == []


def test_typed_values_are_attributed_to_their_type(package_builder) -> None:
    package_builder.write(
        {
            "color.go": """
            package demo

            // Color is a hue.
            type Color int

            // Palette.
            const (
                Red Color = iota
                Green
                Blue
            )

            // Default color.
            var Default Color = Red

            const Max int = 3

            var Mixed = Color(1)

            const (
                A Color = 1
                B int   = 2
            )
            """,
        }
    )

    _, model = package_builder.classify()

    color = model.types["Color"]
    assert [group.names for group in color.consts] == [["Red", "Green", "Blue"]]
    assert color.consts[0].doc == "Palette.\n"
    assert [group.names for group in color.vars] == [["Default"]]
    assert [group.names for group in model.consts] == [["Max"], ["A", "B"]]
    assert [group.names for group in model.vars] == [["Mixed"]]


def test_grouped_type_declaration_splits_into_entries(package_builder) -> None:
    package_builder.write(
        {
            "types.go": """
            package demo

            // Shared doc.
            type (
                First int

                // Second has its own doc.
                Second string
            )
            """,
        }
    )

    _, model = package_builder.classify()

    assert list(model.types) == ["First", "Second"]
    assert model.types["First"].doc == "Shared doc.\n"
    assert model.types["Second"].doc == "Second has its own doc.\n"
    assert model.types["First"].decl.keyword == "type"


def test_detached_and_trailing_comments_are_not_docs(package_builder) -> None:
    package_builder.write(
        {
            "a.go": """
            // Copyright notice.

            package demo

            // Detached.

            func Detached() {}

            var x = 1 // trailing
            func Trailing() {}
            """,
        }
    )

    _, model = package_builder.classify()

    assert model.doc == ""
    assert [(func.name, func.doc) for func in model.funcs] == [("Detached", ""), ("Trailing", "")]


def test_package_docs_from_several_files_are_joined(package_builder) -> None:
    package_builder.write(
        {
            "a.go": "// First part.\npackage demo\n",
            "b.go": "// Second part.\npackage demo\n",
        }
    )

    _, model = package_builder.classify()

    assert model.doc == "First part.\n\nSecond part."


def test_exported_only_drops_unexported_names(package_builder) -> None:
    package_builder.write(
        {
            "a.go": """
            package demo

            const internal = 1

            const (
                Public  = 1
                private = 2
            )

            func helper() {}

            func Helper() {}

            type hidden struct{}

            func (h hidden) Show() {}

            type Shown struct{}

            func (s Shown) Show() {}

            func (s Shown) show() {}
            """,
        }
    )

    _, everything = package_builder.classify()
    _, exported = package_builder.classify(exported_only=True)

    assert [func.name for func in everything.funcs] == ["helper", "Helper"]
    assert list(everything.types) == ["hidden", "Shown"]

    assert [group.names for group in exported.consts] == [["Public", "private"]]
    assert [func.name for func in exported.funcs] == ["Helper"]
    assert list(exported.types) == ["Shown"]
    assert [func.name for func in exported.types["Shown"].funcs] == ["Show"]
