"""Pygments-backed line counter — implements the LineCounter port.

Every file is matched to a lexer by filename; the lexer's token stream then
decides, line by line, whether the line carries code, only comments, or
nothing at all.  A line with both code and a trailing comment counts as code.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import AbstractSet, Iterator

from pygments.lexer import Lexer
from pygments.lexers import get_all_lexers, get_lexer_for_filename
from pygments.token import Comment, String, _TokenType
from pygments.util import ClassNotFound

from repo_stats.domain.entities import FileReport, LanguageStats

logger = logging.getLogger(__name__)

SKIP_DIRS: frozenset[str] = frozenset({".git", ".hg", ".svn"})

_BINARY_SNIFF_BYTES = 8000


class PygmentsLineCounter:
    """Concrete LineCounter whose language names are Pygments lexer names."""

    def __init__(self) -> None:
        self._languages = frozenset(name for name, *_ in get_all_lexers())

    def known_languages(self) -> AbstractSet[str]:
        return self._languages

    def count(self, root: Path, languages: AbstractSet[str] | None = None) -> LanguageStats:
        """Walk *root* and count every recognised text file."""
        reports: list[FileReport] = []
        for path in _iter_files(root):
            lexer = _lexer_for(path.name)
            if lexer is None:
                continue
            if languages is not None and lexer.name not in languages:
                continue

            try:
                data = path.read_bytes()
            except OSError:
                logger.debug("Unreadable file %s — skipping", path, exc_info=True)
                continue
            if b"\0" in data[:_BINARY_SNIFF_BYTES]:
                continue

            blanks, code, comments = classify_lines(data.decode("utf-8", errors="replace"), lexer)
            reports.append(
                FileReport(
                    name=str(path),
                    language=lexer.name,
                    blanks=blanks,
                    code=code,
                    comments=comments,
                )
            )

        logger.info("Counted %d files under %s", len(reports), root)
        return LanguageStats.from_reports(reports)


def classify_lines(text: str, lexer: Lexer) -> tuple[int, int, int]:
    """Return ``(blanks, code, comments)`` for *text* lexed with *lexer*."""
    # Only "\n" ends a line; form feeds and other separators stay inside it.
    total = text.count("\n") + (1 if text and not text.endswith("\n") else 0)
    code_lines: set[int] = set()
    comment_lines: set[int] = set()

    line = 0
    for token_type, value in lexer.get_tokens(text):
        for offset, part in enumerate(value.split("\n")):
            if offset:
                line += 1
            if not part.strip():
                continue
            if _is_comment(token_type):
                comment_lines.add(line)
            else:
                code_lines.add(line)

    code = len(code_lines)
    comments = len(comment_lines - code_lines)
    return max(total - code - comments, 0), code, comments


def _is_comment(token_type: _TokenType) -> bool:
    if token_type in Comment.Preproc or token_type in Comment.PreprocFile:
        return False
    return token_type in Comment or token_type in String.Doc


@lru_cache(maxsize=4096)
def _lexer_for(filename: str) -> Lexer | None:
    try:
        return get_lexer_for_filename(filename, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return None


def _iter_files(root: Path) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
        for filename in filenames:
            path = Path(dirpath, filename)
            if not path.is_symlink():
                yield path
