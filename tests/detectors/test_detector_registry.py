"""
Tests for detector registry helpers.
"""

from types import SimpleNamespace

from git_focus import detectors
from git_focus.detectors.base import Candidate, DetectorContext, DetectorSpec


class DummyEntryPoint:
    """Simple stand-in for importlib.metadata.EntryPoint."""

    def __init__(self, value):
        self._value = value

    def load(self):
        return self._value


def _spec(name: str) -> DetectorSpec:
    def _detector(_items, _context: DetectorContext) -> list[Candidate]:
        return []

    return DetectorSpec(name=name, source="repositories", detector=_detector)


def test_builtin_registration_order():
    """Builtin detectors load in registration order."""
    names = [spec.name for spec in detectors._load_builtin_detector_specs()]
    assert names == [
        "missing_license",
        "stale_repository",
        "stale_pull_request",
        "stale_issue",
        "missing_description",
        "incomplete_profile",
        "contribution_gap",
    ]


def test_load_builtin_detector_specs_filters_missing_detector(monkeypatch):
    """Modules without DETECTOR are skipped."""
    spec = _spec("Builtin")
    modules = {
        "mod.with.detector": SimpleNamespace(DETECTOR=spec),
        "mod.without.detector": SimpleNamespace(),
    }

    monkeypatch.setattr(detectors, "_BUILTIN_MODULES", list(modules.keys()))
    monkeypatch.setattr(detectors, "import_module", lambda path: modules[path])

    assert detectors._load_builtin_detector_specs() == [spec]


def test_load_entrypoint_detector_specs_handles_factories(monkeypatch):
    """Entry points may expose a DetectorSpec or a factory returning one."""
    spec_direct = _spec("Direct")
    spec_factory = _spec("Factory")

    entrypoints = [
        DummyEntryPoint(spec_direct),
        DummyEntryPoint(lambda: spec_factory),
        DummyEntryPoint("not a spec"),
        DummyEntryPoint(lambda: "nope"),
    ]
    monkeypatch.setattr(detectors, "entry_points", lambda group: entrypoints)

    assert detectors._load_entrypoint_detector_specs() == [spec_direct, spec_factory]


class FailingEntryPoint:
    """Entry point whose import fails."""

    name = "broken_plugin"

    def load(self):
        raise ImportError("plugin missing dependency")


def test_load_entrypoint_detector_specs_skips_failing_plugins(monkeypatch, capsys):
    """A plugin that fails to import or to build is reported and skipped."""
    spec_ok = _spec("Ok")

    def _broken_factory():
        raise RuntimeError("factory exploded")

    entrypoints = [
        FailingEntryPoint(),
        DummyEntryPoint(_broken_factory),
        DummyEntryPoint(spec_ok),
    ]
    monkeypatch.setattr(detectors, "entry_points", lambda group: entrypoints)

    assert detectors._load_entrypoint_detector_specs() == [spec_ok]
    err = capsys.readouterr().err
    assert "broken_plugin" in err


def test_load_detector_specs_deduplicates(monkeypatch):
    """Entry-point detectors do not override builtin names."""
    monkeypatch.setattr(
        detectors, "_load_builtin_detector_specs", lambda: [_spec("A"), _spec("B")]
    )
    monkeypatch.setattr(
        detectors, "_load_entrypoint_detector_specs", lambda: [_spec("B"), _spec("C")]
    )

    assert [spec.name for spec in detectors.load_detector_specs()] == ["A", "B", "C"]
