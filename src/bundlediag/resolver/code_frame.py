"""Render a few lines of source around a position, with a gutter and caret."""

from __future__ import annotations


def render_code_frame(
    source: str,
    line: int,
    column: int | None = None,
    lines_above: int = 2,
    lines_below: int = 3,
) -> str:
    """Render the code frame for a 1-based ``line`` and 0-based ``column``.

    Returns ``""`` when ``line`` falls outside the source.

        1 | import a from 'a'
      > 2 | import b from 'missing'
          |        ^
        3 | export default a
    """
    lines = source.split("\n")
    if line < 1 or line > len(lines):
        return ""
    first = max(1, line - lines_above)
    last = min(len(lines), line + lines_below)
    width = len(str(last))

    out: list[str] = []
    for number in range(first, last + 1):
        text = lines[number - 1]
        gutter = str(number).rjust(width)
        if number == line:
            out.append(f"> {gutter} | {text}".rstrip())
            if column is not None:
                out.append(f"  {' ' * width} | {' ' * max(column, 0)}^")
        else:
            out.append(f"  {gutter} | {text}".rstrip())
    return "\n".join(out)
