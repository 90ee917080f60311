"""Lazy splitting of decoded subtitle text into candidate blocks."""

from __future__ import annotations

from itertools import chain
from typing import Iterable, Iterator, List

from .utils import is_counter_line

Block = List[str]


def iter_blank_line_blocks(lines: Iterable[str]) -> Iterator[Block]:
    """Yield runs of non-blank lines separated by blank or whitespace-only lines."""

    chunk: Block = []
    for line in lines:
        stripped = line.rstrip("\r\n")
        if not stripped.strip():
            if chunk:
                yield chunk
                chunk = []
            continue
        chunk.append(stripped)
    if chunk:
        yield chunk


def iter_numbered_blocks(lines: Iterable[str]) -> Iterator[Block]:
    """Yield blocks started by digit-only marker lines.

    The marker lines themselves are not part of any block, so this also
    works for files whose blank separators were stripped.
    """

    chunk: Block = []
    for line in lines:
        stripped = line.rstrip("\r\n")
        if is_counter_line(stripped.strip()):
            if any(part.strip() for part in chunk):
                yield chunk
            chunk = []
            continue
        chunk.append(stripped)
    if any(part.strip() for part in chunk):
        yield chunk


def iter_srt_blocks(text: str) -> Iterator[Block]:
    """Split SRT text on blank lines, falling back to counter lines.

    The fallback applies when fewer than two blank-line delimited blocks
    exist. Only the first two blocks are read ahead before streaming.
    """

    blocks = iter_blank_line_blocks(text.splitlines())
    head = [block for block in (next(blocks, None), next(blocks, None)) if block is not None]
    if len(head) < 2:
        yield from iter_numbered_blocks(text.splitlines())
        return
    yield from chain(head, blocks)
