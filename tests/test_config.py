"""
Test configuration loading.
"""

import zlib

import pytest

from plumbing import AuthorIdentity, ConfigError, Repository, load_config
from plumbing.config import DEFAULT_EMAIL, DEFAULT_NAME, default_config


def test_missing_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "config")

    assert config.identity == AuthorIdentity()
    assert config.identity.name == DEFAULT_NAME
    assert config.identity.email == DEFAULT_EMAIL
    assert config.compression_level == zlib.Z_DEFAULT_COMPRESSION
    assert config.metadata_dir == ".git"


def test_reads_identity_and_compression(tmp_path):
    path = tmp_path / "config"
    path.write_text(
        "[user]\n"
        "name = Grace Hopper\n"
        "email = grace@example.com\n"
        "[commit]\n"
        "utcoffset = -0500\n"
        "[core]\n"
        "compression = 9\n"
    )

    config = load_config(path)

    assert config.identity == AuthorIdentity('Grace Hopper', 'grace@example.com', '-0500')
    assert config.compression_level == 9


@pytest.mark.parametrize("body", [
    "[commit]\nutcoffset = 3 hours\n",
    "[core]\ncompression = 11\n",
    "[core]\ncompression = high\n",
    "[user]\nemail = <bad>\n",
    "not an ini file",
])
def test_invalid_values(tmp_path, body):
    path = tmp_path / "config"
    path.write_text(body)

    with pytest.raises(ConfigError):
        load_config(path)


def test_directory_in_place_of_config(tmp_path):
    path = tmp_path / "config"
    path.mkdir()

    with pytest.raises(ConfigError) as exc_info:
        load_config(path)

    assert exc_info.value.path == str(path)


def test_non_utf8_config(tmp_path):
    path = tmp_path / "config"
    path.write_bytes(b"[user]\nname = \xff\xfe\n")

    with pytest.raises(ConfigError):
        load_config(path)


def test_unreadable_config_blocks_repository(tmp_path):
    root = tmp_path / ".git"
    Repository(root).initialize()
    (root / "config").write_bytes(b"[user]\nname = \xff\n")

    with pytest.raises(ConfigError):
        Repository(root)


def test_default_config_sections():
    config = default_config()

    assert config.get('core', 'repositoryformatversion') == '0'
    assert config.get('core', 'bare') == 'false'


def test_repository_reads_config_file(tmp_path):
    root = tmp_path / ".git"
    Repository(root).initialize()
    with (root / "config").open("a") as f:
        f.write("[user]\nname = Grace Hopper\nemail = grace@example.com\n")

    repo = Repository(root)

    assert repo.config.identity.name == 'Grace Hopper'
    assert repo.commit_builder.identity.email == 'grace@example.com'


def test_signature_format():
    identity = AuthorIdentity('A U Thor', 'author@example.com', '+0100')

    assert identity.signature(42) == 'A U Thor <author@example.com> 42 +0100'
