"""
parampattern diagnostics: shared data model, rich renderer (code frames with carets),
and a plain-text renderer for exception and warning messages.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from parampattern.source import Source, SourceIndex, SourceSpan

__all__ = [
    "Severity",
    "Related",
    "Diagnostic",
    "FrameConfig",
    "Theme",
    "render_diagnostic",
    "format_diagnostic",
]


# ────────────────────────── Core model ──────────────────────────


class Severity(StrEnum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Related:
    label: str
    span: SourceSpan
    source: Source


@dataclass(frozen=True, slots=True)
class Diagnostic:
    message: str
    severity: Severity
    span: SourceSpan
    source: Source
    code: str | None = None
    notes: list[str] = field(default_factory=list)
    hint: str | None = None
    related: list[Related] = field(default_factory=list)

    def headline(self) -> str:
        code = f" [{self.code}]" if self.code else ""
        return f"{self.severity.upper()}{code}: {self.message}"


# ─────────────────────── Rendering config/theme ───────────────────────


@dataclass(frozen=True, slots=True)
class FrameConfig:
    context_lines: int = 2
    tab_width: int = 4
    show_line_numbers: bool = True
    max_related: int = 6  # cap to avoid huge dumps


@dataclass(frozen=True, slots=True)
class Theme:
    info_header: str = "bold cyan"
    warn_header: str = "bold yellow"
    error_header: str = "bold red"
    filename: str = "italic"
    line_no: str = "dim"
    code: str = ""
    caret: str = "bold red"
    note_bullet: str = "dim"
    hint_label: str = "italic dim"


def _sev_style(sev: Severity, theme: Theme) -> str:
    return {
        Severity.INFO: theme.info_header,
        Severity.WARN: theme.warn_header,
        Severity.ERROR: theme.error_header,
    }[sev]


# ────────────────────────── Line/column helpers ──────────────────────────


def _expand_tabs(s: str, tabw: int) -> str:
    return s.expandtabs(tabw)


def _display_col(raw_line: str, raw_col_1: int, tabw: int) -> int:
    """
    Convert a 1-indexed raw column (with tabs) into a 1-indexed display column
    after tab expansion, to keep carets visually aligned.
    """
    prefix = raw_line[: max(0, raw_col_1 - 1)]
    return len(_expand_tabs(prefix, tabw)) + 1


def _line_bounds(line_starts: Sequence[SourceIndex], i1: int, text_len: int) -> tuple[int, int]:
    idx = i1 - 1
    start = int(line_starts[idx])
    end = int(line_starts[idx + 1]) if idx + 1 < len(line_starts) else text_len
    return start, end


def _context_window(
    source: Source, start_line: int, end_line: int, cfg: FrameConfig
) -> tuple[int, int]:
    max_line = max(1, len(source.line_starts))
    lo = max(1, start_line - cfg.context_lines)
    hi = min(max_line, end_line + cfg.context_lines)
    return lo, hi


# ────────────────────────── Frame builder ──────────────────────────


@dataclass(frozen=True, slots=True)
class _FrameRow:
    line_no: int
    text: str  # tab-expanded, without line terminator
    caret_col: int | None = None  # 1-indexed display column, None if the line has no caret
    caret_width: int = 0


def _frame_rows(source: Source, span: SourceSpan, cfg: FrameConfig) -> list[_FrameRow]:
    """
    Lines (with context) around `span`, each annotated with the caret run to draw
    under it. Zero-width spans get a single caret.
    """
    text = source.contents
    s_line, s_col = source.pos_to_line_col(span.start)  # 1-indexed
    e_line, e_col = source.pos_to_line_col(span.end)  # 1-indexed (end-exclusive)

    lo_line, hi_line = _context_window(source, s_line, e_line, cfg)

    rows: list[_FrameRow] = []
    for line_no in range(lo_line, hi_line + 1):
        lstart, lend = _line_bounds(source.line_starts, line_no, len(text))
        raw_line = text[lstart:lend].rstrip("\n\r")
        disp_line = _expand_tabs(raw_line, cfg.tab_width)

        if not (s_line <= line_no <= e_line):
            rows.append(_FrameRow(line_no, disp_line))
            continue

        if line_no == s_line:
            start_disp_col = _display_col(raw_line, s_col, cfg.tab_width)
        else:
            start_disp_col = 1

        if line_no == e_line:
            end_disp_col = _display_col(raw_line, e_col, cfg.tab_width)
        else:
            end_disp_col = len(disp_line) + 1

        caret_w = max(1, end_disp_col - start_disp_col)
        rows.append(_FrameRow(line_no, disp_line, start_disp_col, caret_w))

    return rows


def _build_code_frame(
    source: Source,
    span: SourceSpan,
    severity: Severity,
    theme: Theme,
    cfg: FrameConfig,
) -> RenderableType:
    """
    Visual code frame with context lines and carets, handling multi-line spans and tabs.
    """
    rows = _frame_rows(source, span, cfg)
    s_line, s_col = source.pos_to_line_col(span.start)

    header = Text()
    header.append(source.label, style=theme.filename)
    header.append(":")
    header.append(f"{s_line}:{s_col}", style=theme.line_no)

    gutter_w = len(str(rows[-1].line_no))
    lines: list[Text] = []

    for row in rows:
        code_line = Text(row.text, style=theme.code)
        if cfg.show_line_numbers:
            gutter = Text(f"{row.line_no:>{gutter_w}}", style=theme.line_no)
            lines.append(Text.assemble(gutter, Text(" | "), code_line))
        else:
            lines.append(code_line)

        if row.caret_col is None:
            continue

        gutter_pad = gutter_w + 3 if cfg.show_line_numbers else 0
        caret = Text(" " * (gutter_pad + row.caret_col - 1))
        caret.append("^" * row.caret_width, style=theme.caret)
        lines.append(caret)

    body = Text()
    for i, ln in enumerate(lines):
        if i:
            body.append("\n")
        body.append(ln)

    return Panel.fit(body, title=header, border_style=_sev_style(severity, theme), padding=(0, 1))


def render_diagnostic(
    d: Diagnostic,
    *,
    theme: Theme | None = None,
    cfg: FrameConfig | None = None,
) -> RenderableType:
    """
    Assemble a Rich renderable for a Diagnostic: header, rule, main code frame,
    related frames (capped), and optional notes/hint.
    """
    theme = theme or Theme()
    cfg = cfg or FrameConfig()

    head = Text()
    head.append(f"{d.severity.upper()}", style=_sev_style(d.severity, theme))
    if d.code:
        head.append(f" [{d.code}]")
    head.append(f": {d.message}")

    main = _build_code_frame(d.source, d.span, d.severity, theme, cfg)

    rel_blocks: list[RenderableType] = []
    if d.related:
        rel = d.related[: cfg.max_related]
        for r in rel:
            rel_head = Text(r.label, style=theme.line_no)
            rel_frame = _build_code_frame(r.source, r.span, d.severity, theme, cfg)
            rel_blocks.extend([rel_head, rel_frame])
        omitted = len(d.related) - len(rel)
        if omitted > 0:
            rel_blocks.append(
                Text(f"... and {omitted} more related locations", style=theme.line_no)
            )

    trailer = Text()
    for n in d.notes:
        trailer.append("\n• ", style=theme.note_bullet)
        trailer.append(n)
    if d.hint:
        trailer.append("\n")
        trailer.append("Hint: ", style=theme.hint_label)
        trailer.append(d.hint)

    return Group(
        head,
        Rule(style=_sev_style(d.severity, theme)),
        main,
        *rel_blocks,
        *([trailer] if trailer.plain else []),
    )


# ────────────────────────── Plain text ──────────────────────────


def _plain_code_frame(source: Source, span: SourceSpan, cfg: FrameConfig) -> list[str]:
    rows = _frame_rows(source, span, cfg)
    gutter_w = len(str(rows[-1].line_no))
    out = [f"  --> {source.label}:{':'.join(map(str, source.pos_to_line_col(span.start)))}"]
    for row in rows:
        if cfg.show_line_numbers:
            out.append(f"{row.line_no:>{gutter_w}} | {row.text}".rstrip())
        else:
            out.append(row.text)
        if row.caret_col is not None:
            gutter_pad = gutter_w + 3 if cfg.show_line_numbers else 0
            out.append(" " * (gutter_pad + row.caret_col - 1) + "^" * row.caret_width)
    return out


def format_diagnostic(d: Diagnostic, *, cfg: FrameConfig | None = None) -> str:
    """
    Plain-text rendering (no markup, no colors) for exception messages, logs and CI:
    the headline, then the offending text reproduced with a caret line under the span.
    """
    cfg = cfg or FrameConfig()
    lines = [d.headline()]
    lines.extend(_plain_code_frame(d.source, d.span, cfg))
    for r in d.related[: cfg.max_related]:
        lines.append(r.label)
        lines.extend(_plain_code_frame(r.source, r.span, cfg))
    for n in d.notes:
        lines.append(f"• {n}")
    if d.hint:
        lines.append(f"Hint: {d.hint}")
    return "\n".join(lines)
