"""Lorem ipsum placeholder text for ``lorem``, ``lorem10``, ``loremru4-8`` nodes."""

from __future__ import annotations

import random
import re
from collections.abc import Sequence
from dataclasses import dataclass

from mkcomp.ast import AbbreviationNode, Container, RepeatState

_LOREM_RE = re.compile(r"^lorem([a-z]*)(\d*)(-\d*)?$", re.I)
_HAS_COMMA_RE = re.compile(r",$")

DEFAULT_WORD_COUNT = 30


@dataclass(frozen=True, slots=True)
class Vocabulary:
    common: tuple[str, ...]
    words: tuple[str, ...]


def _words(text: str) -> tuple[str, ...]:
    # Sampling draws distinct words, so the bank must not repeat any
    return tuple(dict.fromkeys(text.split()))


LATIN = Vocabulary(
    common=tuple("lorem ipsum dolor sit amet consectetur adipisicing elit".split()),
    words=_words(
        (
            "exercitationem perferendis perspiciatis laborum eveniet sunt iure nam nobis eum "
            "cum officiis excepturi odio consectetur quasi aut quisquam vel eligendi itaque "
            "non odit tempore quaerat dignissimos facilis neque nihil expedita vitae vero "
            "ipsum nisi animi cumque pariatur velit modi natus iusto eaque sequi illo sed ex "
            "et voluptatibus tempora veritatis ratione assumenda incidunt nostrum placeat "
            "aliquid fuga provident praesentium rem necessitatibus suscipit adipisci quidem "
            "possimus voluptas debitis sint accusantium unde sapiente voluptate qui aspernatur "
            "laudantium soluta amet quo aliquam saepe culpa libero ipsa dicta reiciendis nesciunt "
            "doloribus autem impedit minima maiores repudiandae ipsam obcaecati ullam enim "
            "totam delectus ducimus quis voluptates dolores molestiae harum dolorem quia "
            "voluptatem molestias magni distinctio omnis illum dolorum voluptatum ea quas quam "
            "corporis quae blanditiis atque deserunt laboriosam earum consequuntur hic "
            "cupiditate quibusdam accusamus ut rerum error minus eius ab ad nemo fugit officia "
            "at in id quos reprehenderit numquam iste fugiat sit inventore beatae repellendus "
            "magnam recusandae quod explicabo doloremque aperiam consequatur asperiores commodi "
            "optio dolor labore temporibus repellat veniam architecto est esse mollitia nulla a "
            "similique eos alias dolore tenetur deleniti porro facere maxime corrupti"
        )
    ),
)

RU = Vocabulary(
    common=tuple(
        "далеко-далеко за словесными горами в стране гласных и согласных живут рыбные тексты".split()
    ),
    words=_words(
        (
            "вдали от всех живут они в буквенных домах на берегу семантика большого языкового "
            "океана маленький ручеек даль журчит по всей стране и обеспечивает ее всеми "
            "необходимыми правилами эта парадигматическая страна которой жаренные предложения "
            "залетают прямо рот даже всемогущая пунктуация не имеет власти над рыбными текстами "
            "ведущими безорфографичный образ жизни однажды одна маленькая строчка рыбного текста "
            "имени lorem ipsum решила выйти большой мир грамматики великий оксмокс предупреждал "
            "о злых запятых диких знаках вопроса коварных точках с запятой но текст дал сбить "
            "себя толку он собрал семь своих заглавных букв подпоясал инициал за пояс пустился "
            "дорогу взобравшись первую вершину курсивных гор бросил последний взгляд назад "
            "силуэт своего родного города буквоград заголовок деревни алфавит подзаголовок "
            "своего переулка грустный реторический вопрос скатился его щеке продолжил свой путь "
            "дороге встретил рукопись она предупредила моей все переписывается несколько раз "
            "единственное что меня осталось это приставка возвращайся ты лучше свою безопасную "
            "страну послушавшись рукописи наш продолжил свой путь вскоре ему повстречался "
            "коварный составитель рекламных текстов напоивший языком речью заманивший своё "
            "агентство которое использовало снова снова своих проектах если переписали то "
            "живет там до сих пор"
        )
    ),
)

SP = Vocabulary(
    common=tuple("mujer uno dolor más de poder mismo si".split()),
    words=_words(
        (
            "ejercicio preferencia perspicacia laboral paño suntuoso molde namibia planeador "
            "mirar demás oficinista excepción odio consecuencia casi auto chicharra velo elixir "
            "ataque no odio temporal cuórum dignísimo facilismo letra nihilista expedición alma "
            "alveolar aparte león animal como paria belleza modo natividad justo ataque séquito "
            "pillo sed ex y voluminoso temporalidad verdades racional asunción incidente marejada "
            "placenta amanecer fuga previsor presentación lejos necesariamente sospechoso "
            "adiposidad quindío pócima voluble débito sintió accesorio falda sapiencia "
            "volutas queso permacultura laudo soluciones entero pan litro tonelada culpa "
            "libertario mosca dictado salario nuboso dolor autónomo impedimento mínimo "
            "mayor repugnante ipsum obceno ullam entonces total delicado dual quiso voluptuosidad "
            "dolores moles hartazgo dolorem quiero voluptuoso molestia magnitud distinción omnipotente "
            "ilustre doloroso voluntad ea casa quemar corpóreo cuaderno blandir atento desierto "
            "laborioso tierra consecuente hic cupido quebradizo acusar utensilio rebelde error "
            "menos eius abdominal adicto nemo fugaz oficio atrapa en identidad cosa reprender "
            "número istmo fugitivo sitio invento bebida repelente magnánimo recusar quod "
            "explicativo dolor aperitivo consecuencia asperezas comodín opción dolor labor "
            "temporada repelente venial arquitecto esto ese mole nula similar eso alias dolora "
            "tenedor delicia pórtico fachada máximo corrupto"
        )
    ),
)

VOCABULARIES: dict[str, Vocabulary] = {"latin": LATIN, "ru": RU, "sp": SP}


def lorem(node: AbbreviationNode, ancestors: Sequence[Container], rng: random.Random) -> bool:
    """Turn a ``lorem`` node into a text node; return True when it was rewritten."""
    if not node.name:
        return False
    m = _LOREM_RE.match(node.name)
    if m is None:
        return False

    vocabulary = VOCABULARIES.get(m.group(1), LATIN)
    min_count = max(1, int(m.group(2))) if m.group(2) else DEFAULT_WORD_COUNT
    tail = m.group(3)
    max_count = max(min_count, int(tail[1:])) if tail and tail[1:] else min_count
    word_count = _rand(rng, min_count, max_count)

    repeat = node.repeat or _find_repeater(ancestors)
    node.name = None
    node.attributes = None
    node.value = [paragraph(vocabulary, word_count, rng, repeat is None or repeat.value == 0)]
    return True


def paragraph(
    vocabulary: Vocabulary, word_count: int, rng: random.Random, start_with_common: bool
) -> str:
    """Generate sentences totalling exactly *word_count* words."""
    result: list[str] = []
    total = 0

    if start_with_common and vocabulary.common:
        words = list(vocabulary.common[:word_count])
        total += len(words)
        result.append(_sentence(rng, _insert_commas(rng, words), "."))

    while total < word_count:
        words = _sample(rng, vocabulary.words, min(_rand(rng, 2, 30), word_count - total))
        total += len(words)
        result.append(_sentence(rng, _insert_commas(rng, words)))

    return " ".join(result)


def _rand(rng: random.Random, low: int, high: int) -> int:
    return int(rng.random() * (high - low) + low)


def _sample(rng: random.Random, words: Sequence[str], count: int) -> list[str]:
    iterations = min(len(words), count)
    result: list[str] = []
    while len(result) < iterations:
        word = words[_rand(rng, 0, len(words))]
        if word not in result:
            result.append(word)
    return result


def _choice(rng: random.Random, chars: str) -> str:
    return chars[_rand(rng, 0, len(chars) - 1)]


def _sentence(rng: random.Random, words: list[str], end: str | None = None) -> str:
    if words:
        words = [words[0][0].upper() + words[0][1:], *words[1:]]
    # More dots than question marks
    return " ".join(words) + (end or _choice(rng, "?!..."))


def _insert_commas(rng: random.Random, words: list[str]) -> list[str]:
    if len(words) < 2:
        return words

    words = list(words)
    n = len(words)
    if 3 < n <= 6:
        total = _rand(rng, 0, 1)
    elif 6 < n <= 12:
        total = _rand(rng, 0, 2)
    else:
        total = _rand(rng, 1, 4)

    for _ in range(total):
        pos = _rand(rng, 0, n - 2)
        if not _HAS_COMMA_RE.search(words[pos]):
            words[pos] += ","
    return words


def _find_repeater(ancestors: Sequence[Container]) -> RepeatState | None:
    for ancestor in reversed(ancestors):
        if isinstance(ancestor, AbbreviationNode) and ancestor.repeat is not None:
            return ancestor.repeat
    return None
