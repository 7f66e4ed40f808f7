from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import SupportsIndex


@dataclass(frozen=True, order=True, slots=True)
class SourceIndex:
    pos: int

    def __int__(self) -> int:
        return self.pos

    def __add__(self, n: SupportsIndex) -> SourceIndex:
        return SourceIndex(self.pos + int(n))

    def __sub__(self, other: SupportsIndex | SourceIndex) -> int | SourceIndex:
        if isinstance(other, SourceIndex):
            # distance
            return self.pos - other.pos
        return SourceIndex(self.pos - int(other))

    def __repr__(self) -> str:
        return f"SourceIndex({self.pos})"


@dataclass(frozen=True, slots=True)
class SourceSpan:
    '''0-indexed, [start, end) half-open interval for internal slicing.

    Zero-width spans are allowed: they mark a position (an empty literal
    segment, or the point where matching failed).
    '''
    start: SourceIndex  # inclusive
    end: SourceIndex    # exclusive

    def __post_init__(self) -> None:
        if self.start < SourceIndex(0):
            raise ValueError(f"SourceSpan.start cannot be negative (got {self.start})")
        if self.end < self.start:
            raise ValueError(f"SourceSpan.end ({self.end}) < start ({self.start})")

    @classmethod
    def from_ints(cls, start: int, end: int) -> SourceSpan:
        return cls(SourceIndex(start), SourceIndex(end))

    @classmethod
    def point(cls, pos: int) -> SourceSpan:
        return cls(SourceIndex(pos), SourceIndex(pos))


def _compute_line_starts(s: str) -> tuple[SourceIndex, ...]:
    # Start of each line (1st line starts at 0). Handles \n, \r\n, \r via splitlines.
    # A final line without a terminator gets no sentinel, so EOF stays on it.
    starts = [SourceIndex(0)]
    pos = 0
    for part in s.splitlines(keepends=True):
        pos += len(part)
        if pos < len(s) or part.splitlines()[0] != part:
            starts.append(SourceIndex(pos))
    return tuple(starts)


@dataclass(frozen=True, slots=True)
class Source:
    file: Path | None
    contents: str
    name: str | None = None  # display label when there is no file, e.g. "<pattern>"

    _line_starts: tuple[SourceIndex, ...] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def from_string(cls, contents: str, name: str | None = None) -> Source:
        return cls(None, contents, name)

    @classmethod
    def from_file(cls, path_rep: str | Path | PathLike[str], encoding: str = "utf-8") -> Source:
        path = Path(path_rep)

        if not path.exists():
            raise FileNotFoundError(f"No such file: {path}")
        elif path.is_dir():
            raise IsADirectoryError(f"Expected a file but found a directory: {path}")

        try:
            return cls(path, path.read_text(encoding=encoding))
        except UnicodeDecodeError:
            raise
        except OSError as e:
            raise OSError(f"Failed to read file {path}: {e}") from e

    @property
    def label(self) -> str:
        if self.file is not None:
            return str(self.file)
        return self.name or "<string>"

    def full_span(self) -> SourceSpan:
        return SourceSpan.from_ints(0, len(self.contents))

    def slice(self, span: SourceSpan) -> str:
        if not (0 <= int(span.start) <= int(span.end) <= len(self.contents)):
            raise ValueError("SourceSpan out of bounds for this Source")
        return self.contents[int(span.start):int(span.end)]

    @property
    def line_starts(self) -> tuple[SourceIndex, ...]:
        ls = self._line_starts
        if ls is None:
            ls = _compute_line_starts(self.contents)
            # works for both frozen and non-frozen dataclasses
            object.__setattr__(self, "_line_starts", ls)
        return ls

    def pos_to_line_col(self, pos: SourceIndex | int) -> tuple[int, int]:
        '''returns 1-indexed (line, col), editor-style; accepts pos==len(contents).'''
        if not (0 <= int(pos) <= len(self.contents)):
            raise ValueError(f"pos {pos} out of range [0, {len(self.contents)}]")
        pos = SourceIndex(int(pos))
        ls = self.line_starts
        line_idx = bisect.bisect_right(ls, pos) - 1
        return (line_idx + 1, int(pos - ls[line_idx]) + 1)  # 1-indexed
