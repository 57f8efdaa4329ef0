"""
Repository configuration.

Settings live in an INI file in the metadata directory:

    [core]
    repositoryformatversion = 0
    compression = -1

    [user]
    name = A U Thor
    email = author@example.com

    [commit]
    utcoffset = +0000

Missing files and keys fall back to defaults.
"""

import configparser
import logging
import re
import zlib
from pathlib import Path
from typing import NamedTuple

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_METADATA_DIR = '.git'
DEFAULT_NAME = 'plumbing'
DEFAULT_EMAIL = 'plumbing@localhost'
DEFAULT_UTC_OFFSET = '+0000'

_UTC_OFFSET_RE = re.compile(r'^[+-](?:[01]\d|2[0-3])[0-5]\d$')


class AuthorIdentity(NamedTuple):
    """Author and committer identity written into commits."""

    name: str = DEFAULT_NAME
    email: str = DEFAULT_EMAIL
    utc_offset: str = DEFAULT_UTC_OFFSET

    def validate(self) -> 'AuthorIdentity':
        """Raise ConfigError if any field cannot be written into a commit."""
        if not self.name or '\n' in self.name or '<' in self.name:
            raise ConfigError(f"invalid author name: {self.name!r}")
        if not self.email or '\n' in self.email or '>' in self.email:
            raise ConfigError(f"invalid author email: {self.email!r}")
        if not _UTC_OFFSET_RE.match(self.utc_offset):
            raise ConfigError(f"UTC offset must look like +HHMM: {self.utc_offset!r}")
        return self

    def signature(self, timestamp_millis: int) -> str:
        """Signature text for an author or committer line."""
        return f"{self.name} <{self.email}> {timestamp_millis} {self.utc_offset}"


class StoreConfig(NamedTuple):
    metadata_dir: str = DEFAULT_METADATA_DIR
    compression_level: int = zlib.Z_DEFAULT_COMPRESSION
    identity: AuthorIdentity = AuthorIdentity()


def default_config() -> configparser.ConfigParser:
    """Config written by repository initialization."""
    config = configparser.ConfigParser()

    config.add_section('core')
    config.set('core', 'repositoryformatversion', '0')
    config.set('core', 'filemode', 'true')
    config.set('core', 'bare', 'false')
    config.set('core', 'ignorecase', 'true')

    return config


def load_config(path) -> StoreConfig:
    """
    Load settings from an INI file.

    Returns defaults when the file does not exist.
    Raises ConfigError if the file is unreadable or holds invalid values.
    """
    path = Path(path)
    parser = configparser.ConfigParser()

    if path.exists():
        try:
            with path.open(encoding='utf-8') as f:
                parser.read_file(f)
        except (OSError, UnicodeDecodeError, configparser.Error) as e:
            raise ConfigError(f"cannot read config: {e}", str(path)) from e
    else:
        logger.debug("No config at %s, using defaults", path)

    identity = AuthorIdentity(
        name=parser.get('user', 'name', fallback=DEFAULT_NAME),
        email=parser.get('user', 'email', fallback=DEFAULT_EMAIL),
        utc_offset=parser.get('commit', 'utcoffset', fallback=DEFAULT_UTC_OFFSET),
    )

    try:
        identity.validate()
    except ConfigError as e:
        raise ConfigError(e.reason, str(path)) from e

    try:
        level = parser.getint('core', 'compression', fallback=zlib.Z_DEFAULT_COMPRESSION)
    except ValueError as e:
        raise ConfigError(f"core.compression must be an integer: {e}", str(path)) from e
    if not -1 <= level <= 9:
        raise ConfigError(f"core.compression must be between -1 and 9, got {level}", str(path))

    return StoreConfig(compression_level=level, identity=identity)
