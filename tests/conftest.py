"""
pytest configuration and shared fixtures for react-starter tests.

No test runs a real git or package manager: ``fake_commands`` replaces
``subprocess.run`` and answers ``git clone`` by copying a local template
tree that mirrors the real starter's layout.

Fixtures
--------
template_dir : Path
    A template tree (package.json, vite.config.ts, src/main.tsx, ...).

project_dir : Path
    A copy of the template as if it had just been cloned.

fake_commands : FakeCommands
    Recorder installed in place of ``subprocess.run``.

output_dir : Path
    Parent directory for generated projects.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path

import pytest


# =============================================================================
# Template Tree
# =============================================================================

PACKAGE_JSON = {
    "name": "custom-react-starter",
    "private": True,
    "version": "0.0.0",
    "type": "module",
    "bin": {"custom-react-starter": "bin/cli.js"},
    "scripts": {
        "dev": "vite",
        "build": "tsc -b && vite build",
        "preview": "vite preview",
    },
    "dependencies": {
        "@tanstack/react-router": "^1.114.0",
        "react": "^19.0.0",
        "react-dom": "^19.0.0",
    },
}

VITE_CONFIG = """\
import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'
import { TanStackRouterVite } from '@tanstack/router-plugin/vite'

// https://vite.dev/config/
export default defineConfig({
  plugins: [
    TanStackRouterVite({ target: 'react', autoCodeSplitting: true }),
    react(),
  ],
})
"""

MAIN_TSX = """\
import { StrictMode } from 'react'
import ReactDOM from 'react-dom/client'
import { RouterProvider, createRouter } from '@tanstack/react-router'
import { routeTree } from './routeTree.gen'
import './index.css'

const router = createRouter({ routeTree })

declare module '@tanstack/react-router' {
  interface Register {
    router: typeof router
  }
}

const rootElement = document.getElementById('root')!
if (!rootElement.innerHTML) {
  const root = ReactDOM.createRoot(rootElement)
  root.render(
    <StrictMode>
      <RouterProvider router={router} />
    </StrictMode>,
  )
}
"""

ROOT_ROUTE = """\
import { createRootRoute, Outlet } from '@tanstack/react-router'
import { TanStackRouterDevtools } from '@tanstack/react-router-devtools'

export const Route = createRootRoute({
  component: () => (
    <>
      <Outlet />
      <TanStackRouterDevtools />
    </>
  ),
})
"""

LAYOUT_ROUTE = """\
import { createFileRoute, Outlet } from '@tanstack/react-router'
import React from 'react'

export const Route = createFileRoute('/_layout')({
  component: RouteComponent,
})

function RouteComponent() {
  return (
    <React.Fragment>
      Main Layout
      <Outlet />
    </React.Fragment>
  )
}
"""

INDEX_CSS = """\
:root {
  font-family: system-ui, sans-serif;
}

body {
  margin: 0;
}
"""

TEMPLATE_FILES: dict[str, str] = {
    "package.json": json.dumps(PACKAGE_JSON, indent=2) + "\n",
    "pnpm-lock.yaml": "lockfileVersion: '9.0'\n",
    "package-lock.json": "{}\n",
    "bin/cli.js": "#!/usr/bin/env node\n",
    ".git/HEAD": "ref: refs/heads/main\n",
    "vite.config.ts": VITE_CONFIG,
    "index.html": "<div id=\"root\"></div>\n",
    "src/index.css": INDEX_CSS,
    "src/main.tsx": MAIN_TSX,
    "src/routes/__root.tsx": ROOT_ROUTE,
    "src/routes/_layout.tsx": LAYOUT_ROUTE,
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


# =============================================================================
# Fake Subprocess
# =============================================================================

class FakeCommands:
    """
    Stand-in for ``subprocess.run``.

    Records every call, answers ``git clone`` by copying the template tree
    and fails any command whose joined argv contains a key of ``fail_on``.
    """

    def __init__(self, template_dir: Path) -> None:
        self.template_dir = template_dir
        self.calls: list[tuple[list[str], Path]] = []
        self.fail_on: dict[str, int] = {}

    def __call__(self, args, *, cwd=None, capture_output=False, text=False, check=False, env=None):
        argv = list(args)
        self.calls.append((argv, Path(cwd)))
        joined = " ".join(argv)

        for pattern, returncode in self.fail_on.items():
            if pattern in joined:
                return subprocess.CompletedProcess(argv, returncode, "", "simulated failure")

        if argv[:2] == ["git", "clone"]:
            shutil.copytree(self.template_dir, Path(cwd) / argv[-1])

        return subprocess.CompletedProcess(argv, 0, "", "")

    @property
    def commands(self) -> list[str]:
        """Joined argv of every call, in order."""
        return [" ".join(argv) for argv, _ in self.calls]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep user config files and environment overrides out of every test."""
    sandbox = tmp_path_factory.mktemp("env")
    home = sandbox / "home"
    home.mkdir()
    work = sandbox / "work"
    work.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("REACT_STARTER_TEMPLATE", raising=False)
    monkeypatch.delenv("REACT_STARTER_PM", raising=False)
    monkeypatch.chdir(work)


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A local copy of the template repository layout."""
    return write_tree(tmp_path / "template", TEMPLATE_FILES)


@pytest.fixture
def project_dir(tmp_path: Path, template_dir: Path) -> Path:
    """A project directory as it looks right after cloning."""
    target = tmp_path / "cloned" / "my-app"
    shutil.copytree(template_dir, target)
    return target


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory for generated projects."""
    path = tmp_path / "projects"
    path.mkdir()
    return path


@pytest.fixture
def fake_commands(monkeypatch: pytest.MonkeyPatch, template_dir: Path) -> FakeCommands:
    """Replace subprocess.run so no external command is executed."""
    fake = FakeCommands(template_dir)
    monkeypatch.setattr("reactstarter.runner.shutil.which", lambda name: None)
    monkeypatch.setattr("reactstarter.runner.subprocess.run", fake)
    return fake


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the test suite."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests requiring git or a package manager"
    )
