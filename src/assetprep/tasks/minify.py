"""JavaScript minification shared by the bundling tasks."""

from __future__ import annotations

from typing import Iterable

from calmjs.parse import es5
from calmjs.parse.exceptions import ECMASyntaxError
from calmjs.parse.unparsers.es5 import minify_print

STATEMENT_TERMINATOR = ";\n"


class MinifyError(ValueError):
    pass


def minify_js(source: str, name: str = "<source>") -> str:
    """Parse ``source`` as ES5 and print it without comments or layout whitespace.

    Raises MinifyError when the source does not parse.
    """
    try:
        program = es5(source)
    except ECMASyntaxError as e:
        raise MinifyError(f"Cannot minify {name}: {e}") from e
    return minify_print(program)


def join_statements(chunks: Iterable[str]) -> str:
    return "".join(chunk + STATEMENT_TERMINATOR for chunk in chunks)
