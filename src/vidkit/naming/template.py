"""
A tiny literal-replace template engine for output filenames and directories.

Templates are plain strings with placeholders such as ``{title}``,
``{season:02d}`` and ``{title[0]}``. There is no parsing step: every field
supplied by the caller contributes literal (token, value) replacements, and all
of them are applied in a single left-to-right pass over the template, so a
value that itself contains a placeholder (a title of "Year {year}") is
inserted as is and never substituted again. Placeholders without a field are
left in the output verbatim, so callers pre-populate every token they use,
with a real value or an explicit default (see ``formatter``).

After substitution the rendered string is post-processed in this order:
1. spaces become ``separator`` when it is not a space (scene style uses "."),
2. the whole string is lowercased when ``lowercase`` is set,
3. filesystem-unsafe characters become "-" when the result is a single path
   component (``sanitize=True``).

Directory templates keep their own "/" separators; only the values inserted
into them are sanitized (see ``render_directory_template``).
"""
import re
from typing import Any, Callable, Mapping

from vidkit.utils.file_util import sanitize_filename


def pad2(value: Any) -> str:
    """Zero-pad integers and all-digit strings to two digits; other values pass through."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return f"{value:02d}"
    text = str(value)
    if text.isdigit():
        return f"{int(text):02d}"
    return text


def _replacements(fields: Mapping[str, Any], transform: Callable[[str], str]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for name, value in fields.items():
        pairs.append((f"{{{name}:02d}}", transform(pad2(value))))
        pairs.append((f"{{{name}}}", transform(str(value))))
    if "title" in fields:
        pairs.append(("{title[0]}", transform(str(fields["title"])[:1])))
    return pairs


def _substitute(template: str, pairs: list[tuple[str, str]]) -> str:
    if not pairs:
        return template
    values = dict(pairs)
    pattern = re.compile("|".join(re.escape(token) for token in values))
    return pattern.sub(lambda m: values[m.group(0)], template)


def _finish(rendered: str, separator: str, lowercase: bool) -> str:
    if separator != " ":
        rendered = rendered.replace(" ", separator)
    if lowercase:
        rendered = rendered.lower()
    return rendered


def render_template(
        template: str,
        fields: Mapping[str, Any],
        separator: str = " ",
        lowercase: bool = False,
        sanitize: bool = False,
) -> str:
    """
    Render a template by literal token replacement.

    Examples:
      render_template("{title} ({year})", {"title": "X", "year": 1999}) -> "X (1999)"
      render_template("{title} S{season:02d}E{episode:02d}",
                      {"title": "Breaking Bad", "season": 1, "episode": 5}) -> "Breaking Bad S01E05"
      render_template("{title} {genre}", {"title": "X"}) -> "X {genre}"
    """
    rendered = _substitute(template, _replacements(fields, lambda v: v))
    rendered = _finish(rendered, separator, lowercase)
    if sanitize:
        rendered = sanitize_filename(rendered)
    return rendered


def render_directory_template(
        template: str,
        fields: Mapping[str, Any],
        separator: str = " ",
        lowercase: bool = False,
) -> str:
    """
    Render a directory template whose "/" characters separate path components.

    Values are sanitized before they are inserted, so a title such as
    "Face/Off" cannot introduce an extra directory level.
    """
    rendered = _substitute(template, _replacements(fields, sanitize_filename))
    return _finish(rendered, separator, lowercase)
