"""Template engine — compiles {{name}} placeholders into spans, renders many times.

A template is scanned once into an ordered list of chunks. Each chunk is a
``Span`` into the template's own source string, so compiled templates never
copy text. Rendering walks the chunks and either writes literal text through
or looks the variable name up in the render data. Unknown names are written
back as ``{{name}}`` rather than raising.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Protocol

from plotscript.parser import (
    Span,
    avoid,
    between,
    literal,
    many,
    map_value,
    one_of,
    sequence,
)

logger = logging.getLogger(__name__)

OPEN = "{{"
CLOSE = "}}"


class TemplateError(Exception):
    """Base class for template compilation errors."""


class LiteralCanNotStartWithTwoBraces(TemplateError):
    def __init__(self, offset: int) -> None:
        super().__init__(f"literal text can not start with '{OPEN}' (offset {offset})")
        self.offset = offset


class UnmatchedVariable(TemplateError):
    def __init__(self, offset: int) -> None:
        super().__init__(f"'{OPEN}' at offset {offset} is never closed with '{CLOSE}'")
        self.offset = offset


class ChunkKind(Enum):
    LITERAL = "literal"
    VARIABLE = "variable"


@dataclass(frozen=True)
class Chunk:
    """A literal run of text, or the name inside one ``{{...}}`` placeholder."""

    kind: ChunkKind
    span: Span

    @property
    def extent(self) -> Span:
        """Span of the source covered by this chunk, delimiters included."""
        if self.kind is ChunkKind.VARIABLE:
            return Span(self.span.offset - len(OPEN), self.span.length + len(OPEN) + len(CLOSE))
        return self.span


class Writer(Protocol):
    def write(self, text: str) -> object:
        ...


class Data(Mapping):
    """Read-only render data: variable name -> substitution text."""

    def __init__(self, values: Mapping[str, str] | None = None, **kwargs: str) -> None:
        merged = dict(values or {})
        merged.update(kwargs)
        self._values = MappingProxyType(merged)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Data:
        from plotscript.config import load_data

        return cls(load_data(path))

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Data({dict(self._values)!r})"


@dataclass(frozen=True)
class Template:
    """Compiled template. Immutable; safe to render from several threads."""

    source: str
    chunks: tuple[Chunk, ...]

    def text_of(self, chunk: Chunk) -> str:
        return chunk.span.text(self.source)

    def variables(self) -> list[str]:
        """Variable names in order of first appearance."""
        seen: dict[str, None] = {}
        for chunk in self.chunks:
            if chunk.kind is ChunkKind.VARIABLE:
                seen.setdefault(self.text_of(chunk), None)
        return list(seen)

    def render(self, writer: Writer, data: Mapping[str, str]) -> None:
        """Write the rendered template to ``writer``.

        Substituted values are written verbatim and never re-scanned for
        placeholders. Exceptions raised by ``writer`` propagate unchanged.
        """
        source = self.source
        for chunk in self.chunks:
            text = source[chunk.span.range]
            if chunk.kind is ChunkKind.LITERAL:
                writer.write(text)
            elif text in data:
                writer.write(data[text])
            else:
                writer.write(OPEN)
                writer.write(text)
                writer.write(CLOSE)

    def render_string(self, data: Mapping[str, str]) -> str:
        buf = io.StringIO()
        self.render(buf, data)
        return buf.getvalue()


# ---------------------------------------------------------------------------
# Hand-written scanner (primary compiler)
# ---------------------------------------------------------------------------

def _require_text(source: object) -> None:
    if not isinstance(source, str):
        raise TypeError(f"Template source must be str, got {type(source).__name__}")


def _scan_variable(source: str, position: int) -> Chunk:
    name_start = position + len(OPEN)
    close = source.find(CLOSE, name_start)
    if close < 0:
        raise UnmatchedVariable(position)
    return Chunk(ChunkKind.VARIABLE, Span(name_start, close - name_start))


def _scan_literal(source: str, position: int) -> Chunk:
    stop = source.find(OPEN, position)
    if stop < 0:
        stop = len(source)
    if stop == position:
        raise LiteralCanNotStartWithTwoBraces(position)
    return Chunk(ChunkKind.LITERAL, Span(position, stop - position))


def compile_template(source: str) -> Template:
    """Compile ``source`` into a Template.

    Raises ``UnmatchedVariable`` when a ``{{`` is never closed. The first
    error aborts compilation; no partial template is returned.
    """
    _require_text(source)
    chunks: list[Chunk] = []
    position = 0
    while position < len(source):
        if source.startswith(OPEN, position):
            chunk = _scan_variable(source, position)
        else:
            chunk = _scan_literal(source, position)
        chunks.append(chunk)
        position = chunk.extent.end

    logger.debug("Compiled template: %d chars, %d chunks", len(source), len(chunks))
    return Template(source=source, chunks=tuple(chunks))


# ---------------------------------------------------------------------------
# Combinator-built compiler
# ---------------------------------------------------------------------------

def _variable_chunk(parts: tuple) -> Chunk:
    opener, _name, closer = parts
    return Chunk(ChunkKind.VARIABLE, Span(opener.end, closer.offset - opener.end))


_CHUNK = one_of([
    map_value(sequence(literal(OPEN), between(0, 1, avoid(CLOSE)), literal(CLOSE)), _variable_chunk),
    map_value(avoid(OPEN), lambda span: Chunk(ChunkKind.LITERAL, span)),
])
_CHUNKS = many(_CHUNK)


def compile_with_parsers(source: str) -> Template:
    """Same contract as ``compile_template``, built from parser combinators."""
    _require_text(source)
    chunks, rest = _CHUNKS.parse(source)
    if rest:
        # Only an unclosed "{{" stops both alternatives.
        raise UnmatchedVariable(len(source) - len(rest))
    return Template(source=source, chunks=tuple(chunks))


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def render_string(template: str, data: Mapping[str, str]) -> str:
    """Compile ``template`` and render it against ``data``."""
    return compile_template(template).render_string(data)


def render_template(template_path: str | Path, data: Mapping[str, str]) -> str:
    """Read a template file, render it, return the rendered string."""
    content = Path(template_path).read_text(encoding="utf-8")
    logger.debug("Read template %s (%d chars)", template_path, len(content))
    return render_string(content, data)
