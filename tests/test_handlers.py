"""Every role handler driven through the backend against the fake runtime script."""

from pathlib import Path

import pytest

from pkdeopkg.bitfield import bitfield_from_enums
from pkdeopkg.enums import PkErrorEnum, PkFilterEnum, PkGroupEnum, PkInfoEnum, PkStatusEnum, PkTransactionFlagEnum
from pkdeopkg.jobs.types import JobState

NANO = "nano;7.2-150;x86_64;installed"
GEDIT = "gedit;46.1-80;x86_64;Solus"
DEVEL = "python3-devel;3.11.9-30;x86_64;installed"
ZLIB = "zlib;1.3.1-40;x86_64;installed"

SIMULATE = bitfield_from_enums([PkTransactionFlagEnum.SIMULATE])


def _filters(*members):
    return bitfield_from_enums(members)


def _calls(backend):
    return backend.lifecycle.runtime().call("get_calls")


def _error(job):
    [(kind, code, message)] = job.terminal
    assert kind == "failed"
    return code, message


class TestQueries:
    def test_get_packages_lists_everything(self, backend, job):
        assert backend.get_packages(job, 0) is JobState.FINISHED
        assert job.package_ids == [NANO, GEDIT, DEVEL, ZLIB]
        assert job.of("package")[0] == ("package", PkInfoEnum.INSTALLED, NANO, "Small text editor")
        assert job.of("package")[1][1] is PkInfoEnum.AVAILABLE
        assert job.events[0] == ("status", PkStatusEnum.QUERY)
        assert job.events[-1] == ("finished",)

    @pytest.mark.parametrize(
        "members, expected",
        [
            ((PkFilterEnum.INSTALLED,), [NANO, DEVEL, ZLIB]),
            ((PkFilterEnum.NOT_INSTALLED,), [GEDIT]),
            ((PkFilterEnum.GUI,), [GEDIT]),
            ((PkFilterEnum.NOT_GUI, PkFilterEnum.INSTALLED), [NANO, DEVEL, ZLIB]),
            ((PkFilterEnum.DEVELOPMENT,), [DEVEL]),
            ((PkFilterEnum.NOT_DEVELOPMENT, PkFilterEnum.INSTALLED), [NANO, ZLIB]),
        ],
    )
    def test_get_packages_filters(self, backend, job, members, expected):
        backend.get_packages(job, _filters(*members))
        assert job.package_ids == expected

    def test_contradictory_filters_are_rejected(self, backend, job):
        state = backend.get_packages(job, _filters(PkFilterEnum.INSTALLED, PkFilterEnum.NOT_INSTALLED))
        assert state is JobState.FAILED
        code, _ = _error(job)
        assert code is PkErrorEnum.FILTER_INVALID
        assert job.of("package") == []

    def test_search_names(self, backend, job):
        backend.search_names(job, 0, ["nano"])
        assert job.package_ids == [NANO]

    def test_search_details_matches_summaries(self, backend, job):
        backend.search_details(job, _filters(PkFilterEnum.NOT_INSTALLED), ["editor"])
        assert job.package_ids == [GEDIT]

    def test_search_without_terms_finishes_empty(self, backend, job):
        assert backend.search_names(job, 0, ["  "]) is JobState.FINISHED
        assert job.of("package") == []

    def test_search_files(self, backend, job):
        backend.search_files(job, 0, ["/usr/lib64/libz.so.1"])
        assert job.package_ids == [ZLIB]

    @pytest.mark.parametrize(
        "values, expected",
        [
            (["accessories"], [NANO]),
            (["programming"], [DEVEL]),
            (["desktop"], [GEDIT]),
            (["system", "accessories"], [NANO, ZLIB]),
        ],
    )
    def test_search_groups(self, backend, job, values, expected):
        backend.search_groups(job, 0, values)
        assert job.package_ids == expected

    def test_resolve_accepts_names_and_ids(self, backend, job):
        backend.resolve(job, 0, ["nano", GEDIT, "nano"])
        assert job.package_ids == [NANO, GEDIT]

    def test_resolve_with_installed_filter(self, backend, job):
        backend.resolve(job, _filters(PkFilterEnum.INSTALLED), ["nano", "gedit"])
        assert job.package_ids == [NANO]

    @pytest.mark.parametrize("ids", [[], ["nano;1.0;x86_64"], [";1;x86_64;Solus"]])
    def test_resolve_rejects_bad_ids(self, backend, job, ids):
        backend.resolve(job, 0, ids)
        code, _ = _error(job)
        assert code is PkErrorEnum.PACKAGE_ID_INVALID

    def test_get_details(self, backend, job):
        assert backend.get_details(job, [NANO]) is JobState.FINISHED
        assert job.of("details") == [
            (
                "details",
                NANO,
                "Small text editor",
                "GPL-3.0-or-later",
                PkGroupEnum.ACCESSORIES,
                "About nano",
                "https://example.org",
                1024,
            )
        ]

    def test_get_details_for_unknown_package(self, backend, job):
        backend.get_details(job, [NANO, "ghost;1.0-1;x86_64;Solus"])
        code, message = _error(job)
        assert code is PkErrorEnum.PACKAGE_NOT_FOUND
        assert "ghost" in message
        assert job.of("details") == []

    def test_get_files(self, backend, job):
        backend.get_files(job, [NANO, ZLIB])
        assert job.of("files") == [
            ("files", NANO, ["/usr/bin/nano", "/usr/share/man/man1/nano.1"]),
            ("files", ZLIB, ["/usr/lib64/libz.so.1"]),
        ]

    def test_depends_on(self, backend, job, make_job):
        backend.depends_on(job, 0, [GEDIT], False)
        assert job.package_ids == [NANO]
        deep = make_job()
        backend.depends_on(deep, 0, [GEDIT], True)
        assert deep.package_ids == [NANO, ZLIB]
        assert ("status", PkStatusEnum.DEP_RESOLVE) in deep.events

    def test_required_by(self, backend, job):
        backend.required_by(job, 0, [NANO], False)
        assert job.package_ids == [GEDIT]

    def test_required_by_filtered_out(self, backend, job):
        assert backend.required_by(job, _filters(PkFilterEnum.INSTALLED), [NANO], False) is JobState.FINISHED
        assert job.package_ids == []

    def test_get_updates_maps_severity(self, backend, job):
        backend.get_updates(job, 0)
        assert [(e[1], e[2]) for e in job.of("package")] == [
            (PkInfoEnum.SECURITY, "nano;7.3-151;x86_64;Solus"),
            (PkInfoEnum.NORMAL, "zlib;1.3.2-41;x86_64;Solus"),
        ]


class TestRepos:
    def test_get_repo_list(self, backend, job):
        backend.get_repo_list(job, 0)
        assert job.of("repo_detail") == [
            ("repo_detail", "Solus", "Solus stable", True),
            ("repo_detail", "Unstable", "Solus unstable", False),
        ]

    def test_repo_enable(self, backend, job, make_job):
        assert backend.repo_enable(job, "Unstable", True) is JobState.FINISHED
        listing = make_job()
        backend.get_repo_list(listing, 0)
        assert ("repo_detail", "Unstable", "Solus unstable", True) in listing.events

    @pytest.mark.parametrize("repo_id", ["Missing", "  "])
    def test_repo_enable_unknown_repo(self, backend, job, repo_id):
        backend.repo_enable(job, repo_id, True)
        code, _ = _error(job)
        assert code is PkErrorEnum.REPO_NOT_FOUND


class TestTransactions:
    def test_refresh_reports_progress_from_runtime(self, backend, job):
        assert backend.refresh_cache(job, True) is JobState.FINISHED
        assert job.events == [
            ("status", PkStatusEnum.REFRESH_CACHE),
            ("percentage", 0),
            ("status", PkStatusEnum.REFRESH_CACHE),
            ("percentage", 50),
            ("percentage", 100),
            ("finished",),
        ]
        assert _calls(backend) == [("refresh", True)]

    def test_install_simulate_only_plans(self, backend, job):
        backend.install_packages(job, SIMULATE, [GEDIT])
        assert [(e[1], e[2]) for e in job.of("package")] == [
            (PkInfoEnum.INSTALLING, GEDIT),
            (PkInfoEnum.INSTALLING, "zlib;1.3.1-40;x86_64;Solus"),
        ]
        assert _calls(backend) == []

    def test_install(self, backend, job):
        assert backend.install_packages(job, 0, [GEDIT]) is JobState.FINISHED
        assert job.package_ids == ["gedit;46.1-80;x86_64;installed"]
        assert _calls(backend) == [("install", ["gedit"])]

    def test_install_without_ids_fails(self, backend, job):
        backend.install_packages(job, 0, [])
        code, _ = _error(job)
        assert code is PkErrorEnum.PACKAGE_ID_INVALID

    def test_remove_passes_dependency_flags(self, backend, job):
        backend.remove_packages(job, 0, [NANO], True, False)
        assert [(e[1], e[2]) for e in job.of("package")] == [(PkInfoEnum.REMOVING, NANO)]
        assert _calls(backend) == [("remove", ["nano"], True, False)]

    def test_remove_simulate(self, backend, job):
        backend.remove_packages(job, SIMULATE, [NANO], False, True)
        assert job.package_ids == [NANO]
        assert _calls(backend) == []

    def test_update_packages(self, backend, job, make_job):
        backend.update_packages(job, SIMULATE, [NANO])
        assert job.of("package")[0][1] is PkInfoEnum.UPDATING
        assert _calls(backend) == []
        real = make_job()
        assert backend.update_packages(real, 0, [NANO]) is JobState.FINISHED
        assert _calls(backend) == [("update", ["nano"])]

    def test_download_defaults_to_configured_directory(self, backend, job, settings):
        backend.download_packages(job, [NANO])
        expected = str(Path(settings.download_dir) / "nano.eopkg")
        assert job.of("package") == [("package", PkInfoEnum.DOWNLOADING, "nano;7.2-150;x86_64;Solus", "Small text editor")]
        assert job.of("files") == [("files", "nano;7.2-150;x86_64;Solus", [expected])]

    def test_download_to_explicit_directory(self, backend, job, tmp_path):
        backend.download_packages(job, [ZLIB], str(tmp_path / "out"))
        assert job.of("files")[0][2] == [str(tmp_path / "out" / "zlib.eopkg")]

    def test_repair_is_acknowledged(self, backend, job):
        assert backend.repair_system(job, 0) is JobState.FINISHED
        assert job.events == [("finished",)]
        assert _calls(backend) == []
