import os
import pathlib

import pytest


# keep rich from injecting escape codes into captured output
os.environ.pop('FORCE_COLOR', None)
os.environ['NO_COLOR'] = '1'


DRAFT = 'a-test-post.adoc'


@pytest.fixture
def site(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    monkeypatch.chdir(tmp_path)
    (tmp_path / '_drafts').mkdir()
    (tmp_path / '_posts').mkdir()
    (tmp_path / '_drafts' / DRAFT).write_text('---\nlayout: post\n---\n')
    return tmp_path
