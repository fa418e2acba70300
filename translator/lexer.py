from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

COMMENT_MARKERS = ("//", "#", ";")
SEPARATORS = " \t\r,"

REGISTER_MARKER = "R"

REG_RE = re.compile(REGISTER_MARKER + r"([0-9]+)")
INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class Token:
    kind: str
    value: str
    line: int
    col: int


def classify(value: str) -> str:
    if INT_RE.fullmatch(value):
        return "INT"
    if REG_RE.fullmatch(value):
        return "REG"
    return "ID"


def _is_comment(text: str, i: int) -> bool:
    return any(text.startswith(m, i) for m in COMMENT_MARKERS)


def tokenize(text: str, lineno: int = 1) -> list[Token]:
    """Split one source line on whitespace and commas, dropping a trailing comment."""
    tokens: list[Token] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch in SEPARATORS:
            i += 1
            continue
        if _is_comment(text, i):
            break
        j = i + 1
        while j < len(text) and text[j] not in SEPARATORS and not _is_comment(text, j):
            j += 1
        val = text[i:j]
        kind = classify(val)
        tokens.append(Token(kind, val, lineno, i + 1))
        i = j
    return tokens


def source_lines(src: str) -> Iterator[tuple[int, str, list[Token]]]:
    # пустые строки и строки-комментарии пропускаются
    for lineno, line in enumerate(src.splitlines(), start=1):
        tokens = tokenize(line, lineno)
        if tokens:
            yield lineno, line.strip(), tokens
