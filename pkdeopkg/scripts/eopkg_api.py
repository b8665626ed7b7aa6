"""Runtime functions over eopkg's python API.

Executed by the backend's embedded runtime at initialize. Each public function
returns a list of plain dicts; the backend validates them into records.
``deopkg`` is the bridging module registered by the backend before this file
runs.
"""

import os

import deopkg
import pisi.api
import pisi.db.installdb
import pisi.db.packagedb
import pisi.db.repodb

_installdb = pisi.db.installdb.InstallDB()
_packagedb = pisi.db.packagedb.PackageDB()
_repodb = pisi.db.repodb.RepoDB()


def _text(value):
    return str(value) if value is not None else ""


def _record(name, installed=None):
    """Package dict for ``name``, preferring the installed copy."""
    if installed is None:
        installed = _installdb.has_package(name)
    if installed:
        pkg = _installdb.get_package(name)
        repo = ""
    else:
        pkg, repo = _packagedb.get_package_repo(name)
    return {
        "name": pkg.name,
        "version": pkg.version,
        "release": pkg.release,
        "arch": pkg.architecture or "x86_64",
        "repo": repo,
        "summary": _text(pkg.summary),
        "component": pkg.partOf or "",
        "installed": bool(installed),
    }


def _records(names):
    out = []
    for name in dict.fromkeys(names):
        if _installdb.has_package(name) or _packagedb.has_package(name):
            out.append(_record(name))
    return out


def get_packages():
    installed = set(pisi.api.list_installed())
    rows = [_record(name, installed=True) for name in sorted(installed)]
    rows.extend(_record(name, installed=False) for name in sorted(pisi.api.list_available()) if name not in installed)
    return rows


def search(terms, details):
    if details:
        return _records(pisi.api.search_package(terms))
    wanted = [t.lower() for t in terms]
    names = set(pisi.api.list_installed()) | set(pisi.api.list_available())
    return _records(sorted(n for n in names if all(t in n.lower() for t in wanted)))


def search_files(paths):
    names = []
    for path in paths:
        for name, _files in pisi.api.search_file(path):
            names.append(name)
    return _records(names)


def resolve(names):
    return _records(names)


def get_details(names):
    rows = []
    for row in _records(names):
        if row["installed"]:
            pkg = _installdb.get_package(row["name"])
        else:
            pkg = _packagedb.get_package(row["name"])
        row.update(
            license=" ".join(pkg.license or []) or "unknown",
            description=_text(pkg.description),
            url=_text(getattr(pkg.source, "homepage", "")),
            size=int(pkg.installedSize or 0),
        )
        rows.append(row)
    return rows


def get_files(names):
    rows = []
    for row in _records(names):
        files = []
        if row["installed"]:
            files = ["/" + f.path for f in _installdb.get_files(row["name"]).list]
        row["files"] = files
        rows.append(row)
    return rows


def depends_on(names, recursive):
    seen = set(names)
    queue = list(names)
    found = []
    while queue:
        name = queue.pop(0)
        if _installdb.has_package(name):
            pkg = _installdb.get_package(name)
        else:
            pkg = _packagedb.get_package(name)
        for dep in pkg.runtimeDependencies():
            if dep.package in seen:
                continue
            seen.add(dep.package)
            found.append(dep.package)
            if recursive:
                queue.append(dep.package)
    return _records(found)


def required_by(names, recursive):
    seen = set(names)
    queue = list(names)
    found = []
    while queue:
        name = queue.pop(0)
        for rev_name, _dep in _installdb.get_rev_deps(name):
            if rev_name in seen:
                continue
            seen.add(rev_name)
            found.append(rev_name)
            if recursive:
                queue.append(rev_name)
    return _records(found)


def get_repos():
    return [
        {
            "id": name,
            "description": _repodb.get_repo_url(name),
            "url": _repodb.get_repo_url(name),
            "enabled": _repodb.repo_active(name),
        }
        for name in _repodb.list_repos(only_active=False)
    ]


def set_repo_enabled(repo_id, enabled):
    if not _repodb.has_repo(repo_id):
        return []
    pisi.api.set_repo_activity(repo_id, bool(enabled))
    return [row for row in get_repos() if row["id"] == repo_id]


def refresh(force):
    repos = _repodb.list_repos(only_active=True)
    for index, name in enumerate(repos):
        deopkg.log("updating repository %s" % name)
        pisi.api.update_repo(name, force=bool(force))
        deopkg.set_percentage(int((index + 1) * 100 / max(len(repos), 1)))


def get_updates():
    rows = []
    for name in pisi.api.list_upgradable():
        row = _record(name, installed=False)
        pkg = _packagedb.get_package(name)
        history = pkg.history[0] if pkg.history else None
        row["severity"] = getattr(history, "type", None) or "normal"
        rows.append(row)
    return rows


def plan_install(names):
    return [_record(name, installed=False) for name in pisi.api.get_install_order(names)]


def install(names):
    planned = plan_install(names)
    deopkg.set_status("install")
    pisi.api.install(names)
    return planned


def plan_remove(names, allow_deps, autoremove):
    order = pisi.api.get_remove_order(names) if allow_deps else list(names)
    return [_record(name, installed=True) for name in order]


def remove(names, allow_deps, autoremove):
    planned = plan_remove(names, allow_deps, autoremove)
    deopkg.set_status("remove")
    pisi.api.remove([row["name"] for row in planned])
    return planned


def plan_update(names):
    return [_record(name, installed=False) for name in pisi.api.get_upgrade_order(names)]


def update(names):
    planned = plan_update(names)
    deopkg.set_status("update")
    pisi.api.upgrade(names)
    return planned


def download(names, directory):
    os.makedirs(directory, exist_ok=True)
    pisi.api.fetch(names, directory)
    rows = []
    for name in names:
        row = _record(name, installed=False)
        pkg = _packagedb.get_package(name)
        row["path"] = os.path.join(directory, os.path.basename(pkg.packageURI))
        rows.append(row)
    return rows
