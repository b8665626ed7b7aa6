"""Pytest fixtures: recording job sinks, fake runtime scripts, backends."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from loguru import logger

from pkdeopkg.backend import Backend
from pkdeopkg.config.schema import BackendSettings
from pkdeopkg.logging_utils import configure_logging, reset_logging
from pkdeopkg.runtime.lifecycle import LifecycleState, RuntimeLifecycle

FAKE_RUNTIME = '''
import os

import deopkg

PACKAGES = [
    {"name": "nano", "version": "7.2", "release": 150, "repo": "Solus", "summary": "Small text editor",
     "component": "editor", "installed": True},
    {"name": "gedit", "version": "46.1", "release": 80, "repo": "Solus", "summary": "GNOME text editor",
     "component": "desktop.gnome", "installed": False},
    {"name": "python3-devel", "version": "3.11.9", "release": 30, "repo": "Solus", "summary": "Python headers",
     "component": "programming.python", "installed": True},
    {"name": "zlib", "version": "1.3.1", "release": 40, "repo": "Solus", "summary": "Compression library",
     "component": "system.base", "installed": True},
]
REPOS = [
    {"id": "Solus", "description": "Solus stable", "enabled": True},
    {"id": "Unstable", "description": "Solus unstable", "enabled": False},
]
FILES = {"nano": ["/usr/bin/nano", "/usr/share/man/man1/nano.1"], "zlib": ["/usr/lib64/libz.so.1"]}
DEPENDS = {"gedit": ["nano"], "nano": ["zlib"], "zlib": []}
CALLS = []


def _find(names):
    return [dict(p) for p in PACKAGES if p["name"] in names]


def get_packages():
    return [dict(p) for p in PACKAGES]


def search(terms, details):
    out = []
    for p in PACKAGES:
        hay = (p["name"] + " " + p["summary"]).lower() if details else p["name"].lower()
        if all(t.lower() in hay for t in terms):
            out.append(dict(p))
    return out


def search_files(paths):
    return _find([name for name, files in FILES.items() if any(path in files for path in paths)])


def resolve(names):
    return _find(names)


def get_details(names):
    return [dict(p, license="GPL-3.0-or-later", description="About " + p["name"], url="https://example.org",
                 size=1024) for p in _find(names)]


def get_files(names):
    return [dict(p, files=FILES.get(p["name"], [])) for p in _find(names)]


def depends_on(names, recursive):
    found = []
    queue = list(names)
    while queue:
        for dep in DEPENDS.get(queue.pop(0), []):
            if dep not in found:
                found.append(dep)
                if recursive:
                    queue.append(dep)
    return _find(found)


def required_by(names, recursive):
    return _find([name for name, deps in DEPENDS.items() if any(n in deps for n in names)])


def get_repos():
    return [dict(r) for r in REPOS]


def set_repo_enabled(repo_id, enabled):
    for repo in REPOS:
        if repo["id"] == repo_id:
            repo["enabled"] = enabled
            return [dict(repo)]
    return []


def refresh(force):
    CALLS.append(("refresh", force))
    deopkg.set_status("refresh-cache")
    deopkg.set_percentage(50)


def get_updates():
    return [dict(PACKAGES[0], version="7.3", release=151, installed=False, severity="security"),
            dict(PACKAGES[3], version="1.3.2", release=41, installed=False)]


def plan_install(names):
    return [dict(p, installed=False) for p in _find(names + ["zlib"])]


def install(names):
    CALLS.append(("install", list(names)))
    return [dict(p, installed=True) for p in _find(names)]


def plan_remove(names, allow_deps, autoremove):
    return _find(names)


def remove(names, allow_deps, autoremove):
    CALLS.append(("remove", list(names), allow_deps, autoremove))
    return _find(names)


def plan_update(names):
    return _find(names)


def update(names):
    CALLS.append(("update", list(names)))
    return _find(names)


def download(names, directory):
    return [dict(p, installed=False, path=os.path.join(directory, p["name"] + ".eopkg")) for p in _find(names)]


def get_calls():
    return list(CALLS)


def explode():
    raise RuntimeError("database locked")


def malformed():
    return [{"version": "1.0"}]


def not_a_list():
    return "nano"
'''


class RecordingJob:
    """Job sink that records every signal in order."""

    def __init__(self):
        self.events: list[tuple] = []

    def package(self, info, package_id, summary):
        self.events.append(("package", info, package_id, summary))

    def details(self, package_id, summary, license, group, description, url, size):
        self.events.append(("details", package_id, summary, license, group, description, url, size))

    def files(self, package_id, files):
        self.events.append(("files", package_id, list(files)))

    def repo_detail(self, repo_id, description, enabled):
        self.events.append(("repo_detail", repo_id, description, enabled))

    def set_percentage(self, percent):
        self.events.append(("percentage", percent))

    def set_status(self, status):
        self.events.append(("status", status))

    def finished(self):
        self.events.append(("finished",))

    def failed(self, code, message):
        self.events.append(("failed", code, message))

    def of(self, kind: str) -> list[tuple]:
        return [e for e in self.events if e[0] == kind]

    @property
    def terminal(self) -> list[tuple]:
        return [e for e in self.events if e[0] in ("finished", "failed")]

    @property
    def package_ids(self) -> list[str]:
        return [e[2] for e in self.of("package")]


@pytest.fixture
def make_job():
    return RecordingJob


@pytest.fixture
def job() -> RecordingJob:
    return RecordingJob()


@pytest.fixture
def write_script(tmp_path: Path):
    def _write(source: str, name: str = "runtime.py") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_script(write_script) -> Path:
    return write_script(FAKE_RUNTIME, "fake_eopkg.py")


@pytest.fixture
def settings(fake_script: Path, tmp_path: Path) -> BackendSettings:
    return BackendSettings(script_path=fake_script, download_dir=tmp_path / "downloads")


@pytest.fixture
def lifecycle():
    lc = RuntimeLifecycle()
    yield lc
    if lc.state is LifecycleState.INITIALIZED:
        lc.destroy()


@pytest.fixture
def backend(lifecycle: RuntimeLifecycle, settings: BackendSettings):
    be = Backend(lifecycle=lifecycle, settings=settings)
    be.initialize(None)
    yield be
    be.destroy()


@pytest.fixture
def log_messages():
    # Backend sinks go in first; configure_logging clears loguru handlers once.
    configure_logging(BackendSettings())
    messages: list[str] = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(sink_id)


@pytest.fixture(autouse=True)
def _reset_backend_logging():
    yield
    reset_logging()
