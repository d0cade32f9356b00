"""Checks applied before document text is handed to an MCP client."""

import fnmatch
import logging
import re
from pathlib import Path, PurePosixPath

from .errors import SourceError

logger = logging.getLogger(__name__)

# Never read, whatever their extension
SENSITIVE_NAMES = {
    '.env',
    '.env.local',
    '.env.production',
    '.npmrc',
    '.pypirc',
    '.netrc',
    'credentials.json',
    'service-account.json',
    'secrets.yaml',
    'secrets.yml',
}

SENSITIVE_GLOBS = ['*.pem', '*.key', '*.p12', '*.pfx', 'id_rsa*', 'id_ed25519*']

# (pattern, description) pairs for credentials pasted into docs
SECRET_PATTERNS = [
    (re.compile(r'-----BEGIN [A-Z ]*PRIVATE KEY-----'), 'private key'),
    (re.compile(r'AKIA[0-9A-Z]{16}'), 'AWS access key'),
    (re.compile(r'gh[pousr]_[a-zA-Z0-9]{36}'), 'GitHub token'),
    (re.compile(r'glpat-[a-zA-Z0-9\-_]{20,}'), 'GitLab personal access token'),
    (re.compile(r'npm_[a-zA-Z0-9]{36}'), 'npm access token'),
    (re.compile(r'sk-ant-[a-zA-Z0-9_-]{20,}'), 'Anthropic API key'),
    (re.compile(r'xox[boaprs]-[a-zA-Z0-9\-]+'), 'Slack token'),
]


def is_sensitive_filename(filename: str) -> bool:
    """Check if a filename matches known sensitive file patterns."""
    basename = Path(filename).name.lower()
    if basename in SENSITIVE_NAMES:
        return True
    return any(fnmatch.fnmatch(basename, pattern) for pattern in SENSITIVE_GLOBS)


def find_secrets(content: str) -> list[str]:
    """Descriptions of the secret kinds found in content."""
    return [description for pattern, description in SECRET_PATTERNS if pattern.search(content)]


def ensure_no_secrets(content: str, source: str) -> None:
    """Raise SourceError if the content carries credentials."""
    detected = find_secrets(content)
    if detected:
        logger.warning("Secret detected in %s: %s; refusing document", source, ', '.join(detected))
        raise SourceError(f"Refusing {source}: contains {', '.join(detected)}")


def is_safe_relative_path(file_path: str) -> bool:
    """True for a relative repository path with no `..` components."""
    path = PurePosixPath(file_path.replace('\\', '/'))
    if not file_path or path.is_absolute():
        return False
    return '..' not in path.parts


def is_within(resolved_path: Path, base_path: Path) -> bool:
    """True if resolved_path is inside base_path (no traversal or symlink escape)."""
    try:
        resolved_path.relative_to(base_path)
        return True
    except ValueError:
        return False
