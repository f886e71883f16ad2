"""
Finding detectors and the detector registry.

Builtin detectors are loaded in registration order; that order is also the
tiebreak when two findings share a score. Plugins can add detectors through
the ``git_focus.detectors`` entry-point group.
"""

from importlib import import_module
from importlib.metadata import entry_points

from rich.console import Console
from rich.markup import escape

from git_focus.detectors.base import DetectorSpec

ENTRYPOINT_GROUP = "git_focus.detectors"

console = Console(stderr=True)

_BUILTIN_MODULES = [
    "git_focus.detectors.missing_license",
    "git_focus.detectors.stale_repository",
    "git_focus.detectors.stale_pull_request",
    "git_focus.detectors.stale_issue",
    "git_focus.detectors.missing_description",
    "git_focus.detectors.incomplete_profile",
    "git_focus.detectors.contribution_gap",
]


def _load_builtin_detector_specs() -> list[DetectorSpec]:
    specs: list[DetectorSpec] = []
    for module_path in _BUILTIN_MODULES:
        module = import_module(module_path)
        spec = getattr(module, "DETECTOR", None)
        if spec is not None:
            specs.append(spec)
    return specs


def _load_entrypoint_detector_specs() -> list[DetectorSpec]:
    specs: list[DetectorSpec] = []
    for entry_point in entry_points(group=ENTRYPOINT_GROUP):
        try:
            loaded = entry_point.load()
            if not isinstance(loaded, DetectorSpec) and callable(loaded):
                loaded = loaded()
        except Exception as e:
            name = getattr(entry_point, "name", repr(entry_point))
            console.print(
                f"  [yellow]⚠️  detector plugin {name} failed to load: {escape(str(e))}[/yellow]"
            )
            continue
        if isinstance(loaded, DetectorSpec):
            specs.append(loaded)
    return specs


def load_detector_specs() -> list[DetectorSpec]:
    """Load builtin and plugin detectors; plugins never override builtin names."""
    specs = _load_builtin_detector_specs()
    seen = {spec.name for spec in specs}
    for spec in _load_entrypoint_detector_specs():
        if spec.name in seen:
            continue
        specs.append(spec)
        seen.add(spec.name)
    return specs


__all__ = ["DetectorSpec", "load_detector_specs"]
