"""Round-trip properties of the persisted dialect."""

import random

import pytest

from notes_editor.core.convert.parser import to_tree
from notes_editor.core.convert.serializer import normalize, to_persisted
from notes_editor.models.node import (
    Bold,
    Document,
    Italic,
    Line,
    List,
    ListItem,
    Text,
    Underline,
)

SAMPLES = [
    "**Hello** *world*\n• one\n• two",
    "**bold text",
    "***",
    "* * *",
    "x***y**",
    "<u>*a</u>*",
    "*a **b* c**",
    "**a*b****c*",
    "<u><u>x</u></u>",
    "• **x",
    "•",
    "  • item  ",
    "a\r\n\r\n\r\n\r\nb",
    "** spaced **  and  *more*",
    "</u>stray<u>",
    "*a<u>**x**</u>",
    "<<u></u>u> x</u>",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_normalize_is_idempotent(text: str) -> None:
    once = normalize(text)
    assert normalize(once) == once


def test_tree_survives_persisted_round_trip() -> None:
    tree = Document(
        [
            Line(
                [
                    Text("plain "),
                    Bold([Text("b "), Italic([Text("bi")])]),
                    Text(" "),
                    Underline([Text("u")]),
                ]
            ),
            List([ListItem([Text("one")]), ListItem([Italic([Text("two")])])]),
            Line(),
            Line([Text("end")]),
        ]
    )
    persisted = to_persisted(tree)
    assert persisted == "plain **b *bi*** <u>u</u>\n• one\n• *two*\n\nend"
    assert to_tree(persisted) == tree


def test_scenario_text_round_trips_exactly() -> None:
    text = "**Hello** *world*\n• one\n• two"
    assert to_persisted(to_tree(text)) == text


def test_three_blank_lines_become_one() -> None:
    assert normalize("first\n\n\n\nsecond") == "first\n\nsecond"


def test_unmatched_delimiter_round_trips_literally() -> None:
    assert normalize("**bold text") == "**bold text"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("****•  a", "• a"),
        ("<u></u>•\tx", "• x"),
        ("•*\t***", "•*\t***"),
        ("****•", "•"),
    ],
)
def test_text_that_reads_as_a_bullet_is_written_as_one(text: str, expected: str) -> None:
    assert normalize(text) == expected
    assert normalize(expected) == expected


_PIECES = ["*", "**", "<u>", "</u>", "<", "u>", "/", "•", " ", "\t", "\n", "a", "b"]


def test_normalize_is_idempotent_on_generated_text() -> None:
    rng = random.Random(20261019)
    for _ in range(3000):
        text = "".join(rng.choice(_PIECES) for _ in range(rng.randint(0, 14)))
        once = normalize(text)
        assert normalize(once) == once, f"not idempotent for {text!r}"
