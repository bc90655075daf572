"""Box-drawing table rendering for column-stored data."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from colstore.dtype import Value, display_value


def cell_text(value: Value) -> str:
    """Text shown in a table cell; floats are rounded to two decimals."""
    if isinstance(value, float):
        return f"{value:.2f}"
    return display_value(value)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def column_width(values: Iterable[Value], column_name: str) -> int:
    """Widest of the column name and its cell texts, in bytes."""
    return max((_byte_len(cell_text(v)) for v in values), default=0) if False else max(
        [_byte_len(column_name), *(_byte_len(cell_text(v)) for v in values)]
    )


def render_table(
    columns: Mapping[str, Sequence[Value]], select_columns: Sequence[str]
) -> str:
    """Render the selected columns as a boxed table, one line per row."""
    shown = [name for name in select_columns if name in columns]
    widths = {name: column_width(columns[name], name) for name in shown}

    horizontal = "┼".join("─" * (widths[name] + 2) for name in shown)
    top = f"┌{horizontal.replace('┼', '┬')}┐"
    separator = f"├{horizontal}┤"
    bottom = f"└{horizontal.replace('┼', '┴')}┘"

    max_rows = max((len(col) for col in columns.values()), default=0)

    def line(cells: Iterable[tuple[str, str]]) -> str:
        return "│" + "".join(f" {text:<{widths[name]}} │" for name, text in cells)

    lines = [top, line((name, name) for name in shown), separator]
    for row in range(max_rows):
        lines.append(
            line(
                (name, cell_text(columns[name][row]) if row < len(columns[name]) else "")
                for name in shown
            )
        )
    lines.append(bottom)
    return "\n".join(lines) + "\n"