"""Line-oriented editing of the front matter block at the top of content files.

The block is never parsed as YAML: only top-level ``date:`` lines are looked
at, every other line is kept exactly as it was written.
"""

import datetime
import re

from typing import NamedTuple

from site_compose.errors import ScriptError


_OPENING = '---'
_CLOSING = ('---', '...')
_DATE_KEY = re.compile(r'date\s*:')
_BARE_TIMESTAMP = re.compile(r'[0-9-]+')
_BARE_SCALAR = re.compile(r'[A-Za-z0-9][\w .,!?()/-]*')
_YAML_RESERVED = frozenset({
    'true', 'false', 'yes', 'no', 'on', 'off', 'y', 'n', 'null', '~',
})

_DATE_FORMATS = (
    '%Y-%m-%d',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d %H:%M:%S',
    '%Y/%m/%d',
    '%Y/%m/%d %H:%M',
    '%Y/%m/%d %H:%M:%S',
)


class FrontMatter(NamedTuple):
    lines: list[str]
    # index of the closing marker, the opening one is always line 0
    end: int


def parse_date(value: str) -> datetime.datetime:
    value = value.strip()
    try:
        return datetime.datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise ScriptError(f'Could not parse date: {value!r}')


def quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def format_timestamp(date: datetime.date, fmt: str) -> str:
    """Format ``date`` as a front matter value.

    Values made only of digits and dashes (the default ``%Y-%m-%d`` format) are
    written bare, anything else is single-quoted.
    """
    value = date.strftime(fmt)
    if _BARE_TIMESTAMP.fullmatch(value):
        return value
    return quote(value)


def scalar(value: str) -> str:
    if _BARE_SCALAR.fullmatch(value) and value.lower() not in _YAML_RESERVED and not value.endswith(' '):
        return value
    return quote(value)


def split(text: str) -> FrontMatter | None:
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != _OPENING:
        return None
    for i, line in enumerate(lines[1:], start=1):
        if line.rstrip() in _CLOSING:
            return FrontMatter(lines, i)
    return None


def _newline(lines: list[str]) -> str:
    return '\r\n' if lines and lines[0].endswith('\r\n') else '\n'


def set_date(text: str, value: str) -> str:
    """Set the ``date`` key of the front matter to ``value``, adding it if missing."""
    front_matter = split(text)
    if front_matter is None:
        return f'{_OPENING}\ndate: {value}\n{_CLOSING[0]}\n' + text

    lines, end = front_matter
    newline = _newline(lines)
    date_line = f'date: {value}{newline}'
    patched = [lines[0]]
    replaced = False
    for line in lines[1:end]:
        if _DATE_KEY.match(line):
            if not replaced:
                patched.append(date_line)
                replaced = True
            continue
        patched.append(line)
    if not replaced:
        patched.append(date_line)
    patched.extend(lines[end:])
    return ''.join(patched)


def remove_date(text: str) -> str:
    front_matter = split(text)
    if front_matter is None:
        return text
    lines, end = front_matter
    kept = [line for line in lines[1:end] if not _DATE_KEY.match(line)]
    return ''.join([lines[0], *kept, *lines[end:]])
