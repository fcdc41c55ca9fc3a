import datetime

import pytest

from site_compose import frontmatter
from site_compose.errors import ScriptError


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('2012-3-4', datetime.datetime(2012, 3, 4)),
        ('2012-03-04', datetime.datetime(2012, 3, 4)),
        ('2012-03-04T10:20:30', datetime.datetime(2012, 3, 4, 10, 20, 30)),
        ('2012-3-4 10:20', datetime.datetime(2012, 3, 4, 10, 20)),
        ('2012/3/4', datetime.datetime(2012, 3, 4)),
    ],
)
def test_parse_date(value, expected):
    assert frontmatter.parse_date(value) == expected


def test_parse_date_invalid():
    with pytest.raises(ScriptError) as excinfo:
        frontmatter.parse_date('next tuesday')
    assert 'next tuesday' in excinfo.value.msg


def test_default_timestamp_is_bare():
    assert frontmatter.format_timestamp(datetime.date(2012, 3, 4), '%Y-%m-%d') == '2012-03-04'


def test_custom_timestamp_is_quoted():
    date = datetime.datetime(2012, 3, 4)
    assert frontmatter.format_timestamp(date, '%Y-%m-%d %H:%M:%S') == "'2012-03-04 00:00:00'"


def test_quote_escapes_quotes():
    assert frontmatter.quote("it's") == "'it''s'"


@pytest.mark.parametrize(
    ('value', 'expected'),
    [
        ('My first post', 'My first post'),
        ('post', 'post'),
        ('Title: with colon', "'Title: with colon'"),
        ('yes', "'yes'"),
        ('#hashtag', "'#hashtag'"),
    ],
)
def test_scalar(value, expected):
    assert frontmatter.scalar(value) == expected


def test_set_date_inserts_before_closing_marker():
    text = '---\nlayout: post\n---\nbody\n'
    assert frontmatter.set_date(text, '2012-03-04') == '---\nlayout: post\ndate: 2012-03-04\n---\nbody\n'


def test_set_date_replaces_existing():
    text = '---\ntitle: x\ndate: 2000-01-01\n# comment\n---\n'
    assert frontmatter.set_date(text, '2012-03-04') == '---\ntitle: x\ndate: 2012-03-04\n# comment\n---\n'


def test_set_date_keeps_single_date_key():
    text = '---\ndate: 1\ntitle: x\ndate: 2\n---\n'
    assert frontmatter.set_date(text, '3') == '---\ndate: 3\ntitle: x\n---\n'


def test_set_date_ignores_nested_and_body_dates():
    text = '---\nmeta:\n  date: keep\n---\ndate: in the body\n'
    patched = frontmatter.set_date(text, '2012-03-04')
    assert patched == '---\nmeta:\n  date: keep\ndate: 2012-03-04\n---\ndate: in the body\n'


def test_set_date_without_front_matter():
    assert frontmatter.set_date('body\n', '2012-03-04') == '---\ndate: 2012-03-04\n---\nbody\n'


def test_set_date_unterminated_front_matter():
    text = '---\nlayout: post\n'
    assert frontmatter.set_date(text, '1') == '---\ndate: 1\n---\n' + text


def test_set_date_keeps_crlf():
    text = '---\r\nlayout: post\r\n---\r\n'
    assert frontmatter.set_date(text, '1') == '---\r\nlayout: post\r\ndate: 1\r\n---\r\n'


def test_split_accepts_dots_as_closing_marker():
    front_matter = frontmatter.split('---\na: b\n...\nbody\n')
    assert front_matter is not None
    assert front_matter.end == 2


def test_remove_date():
    text = '---\ntitle: x\ndate: 2012-03-04\n---\ndate: body\n'
    assert frontmatter.remove_date(text) == '---\ntitle: x\n---\ndate: body\n'


def test_remove_date_without_front_matter():
    assert frontmatter.remove_date('date: x\n') == 'date: x\n'
