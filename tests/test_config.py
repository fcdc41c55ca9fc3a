import pytest

from site_compose.config import DEFAULT_TIMESTAMP_FORMAT, Config, load_config, relative_source
from site_compose.errors import ScriptError


def test_defaults(tmp_path):
    assert load_config({}, tmp_path) == Config('', DEFAULT_TIMESTAMP_FORMAT, 'md')


def test_config_file(tmp_path):
    (tmp_path / '_config.yml').write_text(
        'source: site\ncompose:\n  timestamp_format: "%Y-%m-%d %H:%M"\n  extension: .markdown\n'
    )
    assert load_config({}, tmp_path) == Config('site', '%Y-%m-%d %H:%M', 'markdown')


def test_options_override_config_file(tmp_path):
    (tmp_path / '_config.yml').write_text('source: site\n')
    config = load_config({'source': 'other', 'timestamp_format': '%d/%m/%Y'}, tmp_path)
    assert config.source == 'other'
    assert config.timestamp_format == '%d/%m/%Y'


def test_explicit_config_file(tmp_path):
    (tmp_path / 'custom.yml').write_text('source: blog\n')
    assert load_config({'config': 'custom.yml'}, tmp_path).source == 'blog'


def test_missing_explicit_config_file(tmp_path):
    with pytest.raises(ScriptError) as excinfo:
        load_config({'config': 'missing.yml'}, tmp_path)
    assert excinfo.value.msg == 'Configuration file not found: missing.yml'


def test_empty_config_file(tmp_path):
    (tmp_path / '_config.yml').write_text('')
    assert load_config({}, tmp_path) == Config()


def test_config_file_not_a_mapping(tmp_path):
    (tmp_path / '_config.yml').write_text('- a\n- b\n')
    with pytest.raises(ScriptError):
        load_config({}, tmp_path)


def test_relative_source(tmp_path):
    assert relative_source('.', tmp_path) == ''
    assert relative_source('./site', tmp_path) == 'site'
    assert relative_source(tmp_path / 'site', tmp_path) == 'site'
    assert relative_source(tmp_path, tmp_path) == ''


def test_safe(tmp_path):
    assert not load_config({}, tmp_path).safe
    assert load_config({'safe': True}, tmp_path).safe
    (tmp_path / '_config.yml').write_text('safe: true\n')
    assert load_config({}, tmp_path).safe
