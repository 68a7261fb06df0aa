"""Tests for puppetcheck.dispatcher module."""

from __future__ import annotations

import threading

import pytest

from puppetcheck.checkers.base import BaseChecker
from puppetcheck.checkers.registry import CheckerRegistry
from puppetcheck.classifier import FileBucket, classify
from puppetcheck.dispatcher import CheckerNotRegisteredError, dispatch
from puppetcheck.store import DiagnosticStore


class StubChecker(BaseChecker):
    """Checker recording calls and reporting a fixed severity per file."""

    def __init__(self, bucket: FileBucket, severity: str = "clean") -> None:
        self.bucket = bucket  # type: ignore[misc]
        self.severity = severity
        self.calls: list[list[str]] = []

    def check(self, files: list[str], store: DiagnosticStore) -> None:
        self.calls.append(list(files))
        super().check(files, store)

    def check_file(self, path: str, store: DiagnosticStore) -> None:
        if self.severity == "error":
            store.error(path, f"{self.bucket.value} error")
        elif self.severity == "warning":
            store.warning(path, f"{self.bucket.value} warning")
        else:
            store.clean_file(path)


class CrashingChecker(BaseChecker):
    bucket = FileBucket.DATA_JSON

    def check_file(self, path: str, store: DiagnosticStore) -> None:
        raise RuntimeError("checker crashed")


def _registry(*checkers: BaseChecker) -> CheckerRegistry:
    registry = CheckerRegistry()
    for checker in checkers:
        registry.register(checker)
    return registry


class TestDispatch:
    """Tests for sequential dispatch."""

    def test_each_bucket_checked_once_with_its_files(self) -> None:
        manifests = StubChecker(FileBucket.MANIFEST)
        scripts = StubChecker(FileBucket.SCRIPT)
        buckets = classify(["a.pp", "x.rb", "b.pp"])

        dispatch(buckets, _registry(manifests, scripts), DiagnosticStore())

        assert manifests.calls == [["a.pp", "b.pp"]]
        assert scripts.calls == [["x.rb"]]

    def test_empty_buckets_are_skipped(self) -> None:
        manifests = StubChecker(FileBucket.MANIFEST)
        scripts = StubChecker(FileBucket.SCRIPT)

        dispatch(classify(["a.pp"]), _registry(manifests, scripts), DiagnosticStore())

        assert scripts.calls == []

    def test_diagnostics_follow_bucket_and_file_order(self) -> None:
        registry = _registry(
            StubChecker(FileBucket.MANIFEST),
            StubChecker(FileBucket.DATA_JSON),
            StubChecker(FileBucket.DEPENDENCY_DESCRIPTOR),
        )
        buckets = classify(["Puppetfile", "z.json", "b.pp", "a.json", "a.pp"])

        store = dispatch(buckets, registry, DiagnosticStore())

        assert [d.file for d in store.clean] == ["b.pp", "a.pp", "z.json", "a.json", "Puppetfile"]

    def test_ignored_files_recorded_without_checker(self) -> None:
        store = dispatch(classify(["README.md", "LICENSE"]), CheckerRegistry(), DiagnosticStore())
        assert store.ignored == ["-- README.md", "-- LICENSE"]
        assert store.counts()["clean"] == 0

    def test_missing_checker_raises(self) -> None:
        with pytest.raises(CheckerNotRegisteredError, match="manifest"):
            dispatch(classify(["a.pp"]), CheckerRegistry(), DiagnosticStore())

    def test_checker_crash_propagates(self) -> None:
        with pytest.raises(RuntimeError, match="checker crashed"):
            dispatch(classify(["a.json"]), _registry(CrashingChecker()), DiagnosticStore())


class TestParallelDispatch:
    """Tests for parallel dispatch."""

    def test_matches_sequential_order(self) -> None:
        files = ["Puppetfile", "z.json", "b.pp", "c.rb", "a.pp", "d.yaml", "x.txt"]

        def make_registry() -> CheckerRegistry:
            return _registry(
                StubChecker(FileBucket.MANIFEST, "error"),
                StubChecker(FileBucket.SCRIPT, "warning"),
                StubChecker(FileBucket.DATA_YAML),
                StubChecker(FileBucket.DATA_JSON, "error"),
                StubChecker(FileBucket.DEPENDENCY_DESCRIPTOR),
            )

        sequential = dispatch(classify(files), make_registry(), DiagnosticStore())
        parallel = dispatch(classify(files), make_registry(), DiagnosticStore(), parallel=True)

        assert parallel.errors == sequential.errors
        assert parallel.warnings == sequential.warnings
        assert parallel.clean == sequential.clean
        assert parallel.ignored == sequential.ignored

    def test_checkers_run_on_worker_threads(self) -> None:
        seen: list[str] = []

        class ThreadRecorder(StubChecker):
            def check_file(self, path: str, store: DiagnosticStore) -> None:
                seen.append(threading.current_thread().name)
                super().check_file(path, store)

        registry = _registry(ThreadRecorder(FileBucket.MANIFEST), ThreadRecorder(FileBucket.SCRIPT))
        dispatch(classify(["a.pp", "b.rb"]), registry, DiagnosticStore(), parallel=True)

        assert len(seen) == 2
        assert threading.main_thread().name not in seen

    def test_crash_propagates_and_nothing_is_merged(self) -> None:
        registry = _registry(StubChecker(FileBucket.MANIFEST), CrashingChecker())
        store = DiagnosticStore()

        with pytest.raises(RuntimeError, match="checker crashed"):
            dispatch(classify(["a.pp", "b.json"]), registry, store, parallel=True)

        assert store.counts() == {"errors": 0, "warnings": 0, "clean": 0, "ignored": 0}
