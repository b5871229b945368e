"""Shared fixtures: lockfile documents for both supported formats."""

from __future__ import annotations

import json
from typing import Any

import pytest

from npm_version_diff.options import DiffOptions


def build_npm_lock(
    packages: dict[str, Any], root: dict[str, Any] | None = None, lockfile_version: int = 3
) -> str:
    document = {
        "name": "app",
        "version": "1.0.0",
        "lockfileVersion": lockfile_version,
        "requires": True,
        "packages": {
            "": {"name": "app", "version": "1.0.0", **(root or {})},
            **packages,
        },
    }
    return json.dumps(document, indent=2)


NPM_ROOT = {
    "workspaces": ["packages/*"],
    "dependencies": {"express": "^4.18.0", "lodash": "^4.17.20"},
    "devDependencies": {"jest": "^29.0.0"},
}


@pytest.fixture
def make_npm_lock():
    return build_npm_lock


@pytest.fixture
def npm_from() -> str:
    return build_npm_lock(
        {
            "node_modules/a": {"resolved": "packages/a", "link": True},
            "node_modules/debug": {"version": "4.3.4"},
            "node_modules/express": {"version": "4.18.1"},
            "node_modules/express/node_modules/debug": {"version": "2.6.9"},
            "node_modules/fsevents": {"version": "2.3.2", "dev": True, "optional": True},
            "node_modules/jest": {"version": "29.6.0", "dev": True},
            "node_modules/left-pad": {"version": "1.3.0", "dev": True},
            "node_modules/lodash": {"version": "4.17.20"},
            "packages/a": {"name": "a", "version": "0.1.0"},
        },
        root=NPM_ROOT,
    )


@pytest.fixture
def npm_to() -> str:
    return build_npm_lock(
        {
            "node_modules/a": {"resolved": "packages/a", "link": True},
            "node_modules/debug": {"version": "4.3.4"},
            "node_modules/express": {"version": "4.18.2"},
            "node_modules/express/node_modules/accepts": {"version": "1.3.8"},
            "node_modules/fsevents": {"version": "2.3.2", "dev": True, "optional": True},
            "node_modules/jest": {"version": "29.7.0", "dev": True},
            "node_modules/lodash": {"version": "4.17.21"},
            "packages/a": {"name": "a", "version": "0.2.0"},
        },
        root=NPM_ROOT,
    )


PNPM_V9_FROM = """\
lockfileVersion: '9.0'

settings:
  autoInstallPeers: true
  excludeLinksFromLockfile: false

importers:

  .:
    dependencies:
      express:
        specifier: ^4.18.0
        version: 4.18.1
    devDependencies:
      typescript:
        specifier: ^5.0.0
        version: 5.4.4
    optionalDependencies:
      fsevents:
        specifier: ^2.3.0
        version: 2.3.2

  packages/lib:
    dependencies:
      app:
        specifier: workspace:*
        version: link:../..
      '@babel/core':
        specifier: ^7.24.0
        version: 7.24.0

packages:

  '@babel/core@7.24.0':
    resolution: {integrity: sha512-babel}

  accepts@1.3.7:
    resolution: {integrity: sha512-accepts}

  express@4.18.1:
    resolution: {integrity: sha512-express}

  fsevents@2.3.2:
    resolution: {integrity: sha512-fsevents}
    os: [darwin]

  mime-types@2.1.34:
    resolution: {integrity: sha512-mime}

  typescript@5.4.4:
    resolution: {integrity: sha512-ts}
    hasBin: true

snapshots:

  '@babel/core@7.24.0': {}

  accepts@1.3.7:
    dependencies:
      mime-types: 2.1.34

  express@4.18.1:
    dependencies:
      accepts: 1.3.7
      mime-types: 2.1.34

  fsevents@2.3.2:
    optional: true

  mime-types@2.1.34: {}

  typescript@5.4.4: {}
"""

PNPM_V9_TO = """\
lockfileVersion: '9.0'

settings:
  autoInstallPeers: true
  excludeLinksFromLockfile: false

importers:

  .:
    dependencies:
      express:
        specifier: ^4.18.0
        version: 4.18.2
    devDependencies:
      typescript:
        specifier: ^5.0.0
        version: 5.4.5
    optionalDependencies:
      fsevents:
        specifier: ^2.3.0
        version: 2.3.3

  packages/lib:
    dependencies:
      app:
        specifier: workspace:*
        version: link:../..
      '@babel/core':
        specifier: ^7.24.0
        version: 7.24.0

packages:

  '@babel/core@7.24.0':
    resolution: {integrity: sha512-babel}

  accepts@1.3.8:
    resolution: {integrity: sha512-accepts}

  express@4.18.2:
    resolution: {integrity: sha512-express}

  fsevents@2.3.3:
    resolution: {integrity: sha512-fsevents}
    os: [darwin]

  mime-types@2.1.35:
    resolution: {integrity: sha512-mime}

  typescript@5.4.5:
    resolution: {integrity: sha512-ts}
    hasBin: true

snapshots:

  '@babel/core@7.24.0': {}

  accepts@1.3.8:
    dependencies:
      mime-types: 2.1.35

  express@4.18.2:
    dependencies:
      accepts: 1.3.8
      mime-types: 2.1.35

  fsevents@2.3.3:
    optional: true

  mime-types@2.1.35: {}

  typescript@5.4.5: {}
"""

PNPM_V6 = """\
lockfileVersion: '6.0'

settings:
  autoInstallPeers: true
  excludeLinksFromLockfile: false

dependencies:
  express:
    specifier: ^4.18.0
    version: 4.18.2

devDependencies:
  typescript:
    specifier: ^5.0.0
    version: 5.4.5

packages:

  /accepts@1.3.8:
    resolution: {integrity: sha512-accepts}
    engines: {node: '>= 0.6'}
    dependencies:
      mime-types: 2.1.35
    dev: false

  /express@4.18.2:
    resolution: {integrity: sha512-express}
    dependencies:
      accepts: 1.3.8
      mime-types: 2.1.35
    dev: false

  /mime-types@2.1.35:
    resolution: {integrity: sha512-mime}
    dev: false

  /typescript@5.4.5:
    resolution: {integrity: sha512-ts}
    hasBin: true
    dev: true
"""

PNPM_V5 = """\
lockfileVersion: 5.4

specifiers:
  express: ^4.18.0

dependencies:
  express: 4.18.2

packages:

  /accepts/1.3.8:
    resolution: {integrity: sha512-accepts}
    dev: false

  /express/4.18.2:
    resolution: {integrity: sha512-express}
    dependencies:
      accepts: 1.3.8
    dev: false
"""


@pytest.fixture
def pnpm_from() -> str:
    return PNPM_V9_FROM


@pytest.fixture
def pnpm_to() -> str:
    return PNPM_V9_TO


@pytest.fixture
def pnpm_v6() -> str:
    return PNPM_V6


@pytest.fixture
def pnpm_v5() -> str:
    return PNPM_V5


@pytest.fixture
def npm_options() -> DiffOptions:
    return DiffOptions(mode="npm")


@pytest.fixture
def pnpm_options() -> DiffOptions:
    return DiffOptions(mode="pnpm")


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Keep a developer's settings file or env var out of the tests."""
    monkeypatch.delenv("NPM_VERSION_DIFF_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
