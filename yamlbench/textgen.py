"""Random text fragments used to build large benchmark YAML documents."""

from __future__ import annotations

import random
import re
import string

HEX_DIGITS = "0123456789abcdef"
EMAIL_CHARSET = string.ascii_lowercase + string.ascii_uppercase + "-_." + string.digits
ALPHANUMERIC = string.ascii_letters + string.digits
UPPER = string.ascii_uppercase
LOWER = string.ascii_lowercase

_STRIPPED_PUNCTUATION = str.maketrans("", "", "-'\",*:")
_LAST_WHITESPACE = re.compile(r"\s\S*\Z")

_LOREM_WORDS = (
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing",
    "elit", "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore",
    "et", "dolore", "magna", "aliqua", "enim", "ad", "minim", "veniam",
    "quis", "nostrud", "exercitation", "ullamco", "laboris", "nisi",
    "aliquip", "ex", "ea", "commodo", "consequat", "duis", "aute", "irure",
    "in", "reprehenderit", "voluptate", "velit", "esse", "cillum", "fugiat",
    "nulla", "pariatur", "excepteur", "sint", "occaecat", "cupidatat", "non",
    "proident", "sunt", "culpa", "qui", "officia", "deserunt", "mollit",
    "anim", "id", "est", "laborum", "integer", "vitae", "justo", "eget",
    "magnis", "dis", "parturient", "montes", "nascetur", "ridiculus", "mus",
)


def _fork(rng: random.Random) -> random.Random:
    """Return an independent generator starting from the state of `rng`."""
    clone = random.Random()
    clone.setstate(rng.getstate())
    return clone


def lipsum_words(rng: random.Random, count: int) -> str:
    """Return a lorem-ipsum sentence of `count` words.

    The words are drawn from a copy of `rng`, so `rng` itself is not advanced.
    """
    if count <= 0:
        return ""
    local = _fork(rng)
    words = [local.choice(_LOREM_WORDS) for _ in range(count)]
    parts = []
    for position, word in enumerate(words, start=1):
        if position < count and local.random() < 0.1:
            word += ","
        parts.append(word)
    sentence = " ".join(parts)
    return sentence[0].upper() + sentence[1:] + "."


def string_from_set(rng: random.Random, len_lo: int, len_hi: int, charset: str) -> str:
    """Return a string of length in [len_lo, len_hi) drawn from `charset`."""
    length = rng.randrange(len_lo, len_hi)
    return "".join(rng.choice(charset) for _ in range(length))


def hex_string(rng: random.Random, length: int) -> str:
    """Return a string of exactly `length` hexadecimal digits."""
    return string_from_set(rng, length, length + 1, HEX_DIGITS)


def email(rng: random.Random, len_lo: int, len_hi: int) -> str:
    """Return an e-mail address at example.com."""
    return f"{string_from_set(rng, len_lo, len_hi, EMAIL_CHARSET)}@example.com"


def alnum_string(rng: random.Random, lo_len: int, hi_len: int) -> str:
    """Return an alphanumeric string with a length in [lo_len, hi_len)."""
    length = rng.randrange(lo_len, hi_len)
    return "".join(rng.choice(ALPHANUMERIC) for _ in range(length))


def url(
    rng: random.Random,
    scheme: str,
    n_paths_lo: int,
    n_paths_hi: int,
    path_len_lo: int,
    path_len_hi: int,
    extension: str | None = None,
) -> str:
    """Return a random URL on example.com."""
    segments = [
        alnum_string(rng, path_len_lo, path_len_hi)
        for _ in range(rng.randrange(n_paths_lo, n_paths_hi))
    ]
    result = f"{scheme}://example.com" + "".join(f"/{segment}" for segment in segments)
    if extension is not None:
        result += f".{extension}"
    return result


def integer(rng: random.Random, lo: int, hi: int) -> int:
    """Return an integer in [lo, hi)."""
    return rng.randrange(lo, hi)


def paragraph(
    rng: random.Random,
    lines_lo: int,
    lines_hi: int,
    wps_lo: int,
    wps_hi: int,
    line_maxcol: int,
) -> list[str]:
    """Return a lorem-ipsum paragraph wrapped at `line_maxcol` columns."""
    lines: list[str] = []
    nlines = rng.randrange(lines_lo, lines_hi)

    while len(lines) < nlines:
        sentence = lipsum_words(rng, rng.randrange(wps_lo, wps_hi))
        if lines:
            sentence = f"{lines.pop()} {sentence}"

        while len(sentence) > line_maxcol:
            match = _LAST_WHITESPACE.search(sentence[:line_maxcol])
            if match is None:
                raise ValueError(f"cannot wrap line at column {line_maxcol}: no whitespace")
            cut = match.start() + 1
            lines.append(sentence[:cut])
            sentence = sentence[cut + 1 :]
        if sentence:
            lines.append(sentence)

    return lines


def name(rng: random.Random, len_lo: int, len_hi: int) -> str:
    """Return a capitalised name."""
    length = rng.randrange(len_lo, len_hi)
    first = rng.choice(UPPER)
    return first + string_from_set(rng, length, length + 1, LOWER)


def full_name(rng: random.Random, len_lo: int, len_hi: int) -> str:
    """Return a first and last name separated by a space."""
    first = name(rng, len_lo, len_hi)
    last = name(rng, len_lo, len_hi)
    return f"{first} {last}"


def words(rng: random.Random, words_lo: int, words_hi: int) -> str:
    """Return a lorem-ipsum one-liner stripped of YAML-sensitive punctuation."""
    nwords = rng.randrange(words_lo, words_hi)
    return lipsum_words(rng, nwords).translate(_STRIPPED_PUNCTUATION)


def text(
    rng: random.Random,
    paragraphs_lo: int,
    paragraphs_hi: int,
    lines_lo: int,
    lines_hi: int,
    wps_lo: int,
    wps_hi: int,
    line_maxcol: int,
) -> list[str]:
    """Return paragraphs of lorem-ipsum lines separated by empty lines."""
    result: list[str] = []
    for index in range(rng.randrange(paragraphs_lo, paragraphs_hi)):
        if index:
            result.append("")
        result.extend(paragraph(rng, lines_lo, lines_hi, wps_lo, wps_hi, line_maxcol))
    return result