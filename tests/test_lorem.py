"""Tests for lorem ipsum generation with a seeded random source."""

from __future__ import annotations

import random

import pytest

from conftest import seeded_config, text
from mkcomp import expand, parse
from mkcomp.lorem import DEFAULT_WORD_COUNT, LATIN, RU, SP, VOCABULARIES, paragraph


def word_count(value: str) -> int:
    return len(value.split())


class TestParagraph:
    @pytest.mark.parametrize("count", [1, 5, 8, 30, 100])
    def test_exact_word_count(self, count: int) -> None:
        result = paragraph(LATIN, count, random.Random(1), True)
        assert word_count(result) == count

    def test_starts_with_common_words(self) -> None:
        result = paragraph(LATIN, 10, random.Random(1), True)
        assert result.startswith("Lorem")

    def test_without_common_words(self) -> None:
        result = paragraph(LATIN, 10, random.Random(1), False)
        assert not result.lower().startswith("lorem ipsum dolor")

    def test_sentence_ends_with_punctuation(self) -> None:
        result = paragraph(LATIN, 40, random.Random(3), False)
        assert result[-1] in "?!."

    def test_seed_is_deterministic(self) -> None:
        a = paragraph(LATIN, 20, random.Random(7), True)
        b = paragraph(LATIN, 20, random.Random(7), True)
        assert a == b

    @pytest.mark.parametrize("vocabulary", [LATIN, RU, SP])
    def test_vocabularies_have_unique_words(self, vocabulary) -> None:
        assert len(set(vocabulary.words)) == len(vocabulary.words)

    def test_vocabulary_names(self) -> None:
        assert set(VOCABULARIES) == {"latin", "ru", "sp"}


class TestLoremNode:
    def test_default_count(self) -> None:
        node = parse("lorem", seeded_config()).children[0]
        assert node.name is None
        assert word_count(text(node)) == DEFAULT_WORD_COUNT

    def test_explicit_count(self) -> None:
        node = parse("lorem5", seeded_config()).children[0]
        assert word_count(text(node)) == 5

    def test_range(self) -> None:
        for seed in range(10):
            node = parse("lorem3-6", seeded_config(seed=seed)).children[0]
            assert 3 <= word_count(text(node)) <= 6

    def test_russian(self) -> None:
        node = parse("loremru4", seeded_config()).children[0]
        assert text(node).startswith("Далеко-далеко")

    def test_inside_element(self) -> None:
        p = parse("p>lorem4", seeded_config()).children[0]
        assert p.name == "p"
        assert word_count(text(p.children[0])) == 4

    def test_repeated_lorem_gets_tag(self) -> None:
        ul = parse("ul>lorem3*2", seeded_config()).children[0]
        assert [li.name for li in ul.children] == ["li", "li"]
        assert all(word_count(text(li)) == 3 for li in ul.children)

    def test_only_first_repeat_starts_with_common(self) -> None:
        items = parse("p*2>lorem8", seeded_config()).children
        first, second = (text(p.children[0]) for p in items)
        assert first.startswith("Lorem ipsum")
        assert not second.startswith("Lorem ipsum dolor sit amet consectetur")

    def test_expand_is_deterministic_with_seed(self) -> None:
        assert expand("p>lorem10", seeded_config(seed=3)) == expand(
            "p>lorem10", seeded_config(seed=3)
        )
