"""Tests for merging resolutions into the override map."""

import json
import stat

from rn_dedupe.models import Resolved, ResolutionRecord, Unresolvable
from rn_dedupe.parsers.package_json import load_manifest
from rn_dedupe.writer import apply_resolutions, write_overrides


def _record():
    return ResolutionRecord.from_outcomes(
        [
            ("react-native-camera", Resolved("3.40.0")),
            ("react-native-maps", Unresolvable(reason="major versions 0.30.1 and 1.3.2 are unresolvable")),
        ]
    )


class TestApplyResolutions:
    """apply_resolutions() merge rules."""

    def test_missing_map_is_created(self):
        overrides, changed = apply_resolutions(None, ResolutionRecord())

        assert overrides == {}
        assert changed is True

    def test_adds_resolved_pins_only(self):
        overrides, changed = apply_resolutions({}, _record())

        assert overrides == {"react-native-camera": "3.40.0"}
        assert changed is True

    def test_second_application_is_unchanged(self):
        first, _ = apply_resolutions(None, _record())
        second, changed = apply_resolutions(first, _record())

        assert second == first
        assert changed is False

    def test_overwrites_stale_pin_and_keeps_others(self):
        existing = {"react-native-camera": "3.30.0", "left-pad": "1.3.0"}
        overrides, changed = apply_resolutions(existing, _record())

        assert overrides == {"react-native-camera": "3.40.0", "left-pad": "1.3.0"}
        assert changed is True
        assert existing["react-native-camera"] == "3.30.0"

    def test_existing_unresolvable_pin_is_untouched(self):
        existing = {"react-native-maps": "1.3.2"}
        overrides, _ = apply_resolutions(existing, _record())

        assert overrides["react-native-maps"] == "1.3.2"


class TestWriteOverrides:
    """write_overrides() persistence."""

    def test_replaces_pin_map_and_keeps_document(self, tmp_path, write_manifest):
        path = write_manifest(
            {"name": "app", "resolutions": {"old": "1.0.0"}, "dependencies": {"react": "18.2.0"}}
        )
        manifest = load_manifest(path)

        write_overrides(path, manifest, {"react-native-camera": "3.40.0"})

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["resolutions"] == {"react-native-camera": "3.40.0"}
        assert data["dependencies"] == {"react": "18.2.0"}
        assert list(data) == ["name", "resolutions", "dependencies"]
        assert path.read_text(encoding="utf-8").endswith("}\n")

    def test_adds_missing_field(self, tmp_path, write_manifest):
        path = write_manifest({"name": "app"})
        manifest = load_manifest(path, overrides_field="overrides")

        write_overrides(path, manifest, {"a": "1.0.0"})

        assert json.loads(path.read_text(encoding="utf-8"))["overrides"] == {"a": "1.0.0"}
        assert [p.name for p in tmp_path.iterdir()] == ["package.json"]

    def test_keeps_file_mode(self, tmp_path, write_manifest):
        path = write_manifest({"name": "app"})
        path.chmod(0o644)
        manifest = load_manifest(path)

        write_overrides(path, manifest, {"a": "1.0.0"})

        assert stat.S_IMODE(path.stat().st_mode) == 0o644
