"""Shared test fixtures for mdquery MCP tests."""

import pytest


@pytest.fixture
def storage_dir(tmp_path):
    """Provide a temporary storage directory for the document cache."""
    d = tmp_path / "storage"
    d.mkdir()
    return str(d)


@pytest.fixture
def hash_markdown():
    """Return ATX-style markdown with three nested levels."""
    return """# Heading 1

Some body text.

## Heading 2

More text here.

### Heading 3

Additional text for Heading 3.
"""


@pytest.fixture
def underline_markdown():
    """Return Setext-style markdown."""
    return """Heading 1
=========

Some body text.

Heading 2
---------

More text here.

Heading 3
=========

Text under Heading 3.
"""


@pytest.fixture
def combo_markdown():
    """Return markdown mixing ATX and Setext headings."""
    return """# Heading 1

Some body text.

Heading 2
---------

More text here.

### Heading 3

Additional text for Heading 3.

## Heading 4

Some more text here.

Heading 5
=========

Even more text here.
"""


@pytest.fixture
def sample_readme():
    """Return a repository README."""
    return """# My Project

A small library that does useful things.

## Installation

Install with npm:

    npm install my-project

### Windows

Use the installer.

### macOS

Use Homebrew.

## Usage

Run `npm start` to launch.

## Contributing

Pull requests welcome.

## License

MIT License. See LICENSE.
"""


@pytest.fixture
def sample_npm_readme():
    """Return an npm package README."""
    return """# fancy-cli

A command line helper.

## CLI

You can interact with the package through the CLI:

    npx fancy-cli --help

## Scripts

- `npm run build` compiles the sources.
- `npm test` runs the tests.

## Versioning

This package follows Semantic Versioning guidelines.
"""


@pytest.fixture
def sample_changelog():
    """Return a Keep a Changelog style CHANGELOG."""
    return """# Changelog

All notable changes to this project will be documented in this file.

## [Unreleased]

### Added

- Implemented new logging system.

This feature is in development.

## [2.2.1] - 2024-08-25

### Changed

- Minor update to UI layout.

## [2.2.0] - 2024-08-20

### Added

- Introduced caching mechanism for API requests.

### Fixed

- Patched a memory leak in the authentication module.

## [2.1.0] - 2024-07-15

### Deprecated

- Legacy OAuth integration has been deprecated and will be removed in 3.0.0.

### Removed

- Support for Node.js version 12 has been removed.

### Security

- Security vulnerability patched in token generation.
"""


@pytest.fixture
def readme_file(tmp_path, sample_readme):
    """Write the sample README to disk and return its path."""
    path = tmp_path / "README.md"
    path.write_text(sample_readme, encoding="utf-8")
    return path


@pytest.fixture
def changelog_file(tmp_path, sample_changelog):
    """Write the sample CHANGELOG to disk and return its path."""
    path = tmp_path / "CHANGELOG.md"
    path.write_text(sample_changelog, encoding="utf-8")
    return path
