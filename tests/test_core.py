"""End-to-end tests for analyze_project()."""

import json

import pytest

from rn_dedupe.config import Settings
from rn_dedupe.core import analyze_project
from rn_dedupe.errors import MalformedLockfileError, ManifestParseError
from rn_dedupe.report import aggregate


def _manifest(root):
    return json.loads((root / "package.json").read_text(encoding="utf-8"))


class TestAnalyzeProject:
    """Full pipeline over a fixture project."""

    def test_report_only(self, project):
        result = analyze_project(project)

        assert result.duplicates.packages == ("lodash", "react-native-camera", "react-native-maps")
        assert result.native.flagged == frozenset(
            {"react-native-camera", "react-native-maps", "react-native-svg"}
        )
        assert result.native_duplicates == ("react-native-camera", "react-native-maps")
        assert result.native.not_hoisted == frozenset()
        assert result.resolution.resolved == {"react-native-camera": "3.40.0"}
        assert result.resolution.unresolvable == frozenset({"react-native-maps"})
        assert [issue.package for issue in result.peer_issues] == ["react-native-svg"]
        assert result.action_needed is True
        assert result.manifest_changed is True
        assert result.manifest_written is False
        assert "resolutions" not in _manifest(project)

    def test_write_is_idempotent(self, project):
        first = analyze_project(project, write=True)

        assert first.manifest_written is True
        assert _manifest(project)["resolutions"] == {"react-native-camera": "3.40.0"}

        second = analyze_project(project, write=True)

        assert second.manifest_changed is False
        assert second.manifest_written is False

    def test_all_duplicates(self, project):
        result = analyze_project(project, native_only=False)

        assert result.targets == ("lodash", "react-native-camera", "react-native-maps")
        assert result.resolution.resolved == {
            "lodash": "4.17.21",
            "react-native-camera": "3.40.0",
        }

    def test_nested_native_package_is_not_flagged(self, project, install_package):
        install_package(
            "react-native-camera/node_modules/react-native-vision",
            {"ios/Vision.m": "<RCTBridgeModule>"},
        )
        with open(project / "yarn.lock", "a", encoding="utf-8") as handle:
            handle.write('\nreact-native-vision@^2.0.0:\n  version "2.1.0"\n')

        result = analyze_project(project)

        assert "react-native-vision" not in result.native.flagged
        assert result.native.not_hoisted == frozenset()

    def test_flagged_package_missing_from_root(self, project, monkeypatch):
        from rn_dedupe import core

        monkeypatch.setattr(
            core,
            "classify_all",
            lambda names, modules_root, **kwargs: frozenset({"react-native-svg", "react-native-ghost"}),
        )
        result = analyze_project(project)

        assert result.native.not_hoisted == frozenset({"react-native-ghost"})
        assert aggregate(result)["notHoisted"] == ["react-native-ghost"]

    def test_no_action_needed(self, tmp_path, write_manifest, install_package):
        (tmp_path / "yarn.lock").write_text(
            'react-native-svg@^13.0.0:\n  version "13.4.0"\n', encoding="utf-8"
        )
        write_manifest({"name": "app"})
        install_package("react-native-svg", {"index.js": "NativeModules.RNSVG"})

        result = analyze_project(tmp_path, write=True)

        assert result.action_needed is False
        assert result.manifest_written is False
        assert "resolutions" not in _manifest(tmp_path)

    def test_broken_manifest_aborts_before_write(self, project):
        (project / "package.json").write_text('{"resolutions": []}', encoding="utf-8")

        with pytest.raises(ManifestParseError):
            analyze_project(project, write=True)

        assert (project / "package.json").read_text(encoding="utf-8") == '{"resolutions": []}'

    def test_missing_manifest_in_write_mode(self, project):
        (project / "package.json").unlink()

        with pytest.raises(ManifestParseError):
            analyze_project(project, write=True)

    def test_missing_manifest_in_report_mode(self, project):
        (project / "package.json").unlink()

        result = analyze_project(project)

        assert result.peer_issues == ()
        assert result.manifest_changed is True

    def test_malformed_lockfile(self, project):
        (project / "yarn.lock").write_text("# empty\n", encoding="utf-8")

        with pytest.raises(MalformedLockfileError):
            analyze_project(project)

    def test_custom_settings(self, project):
        settings = Settings(overrides_field="overrides", break_on_major_version=False)

        analyze_project(project, settings, write=True)

        assert _manifest(project)["overrides"] == {
            "react-native-camera": "3.40.0",
            "react-native-maps": "1.3.2",
        }


class TestAggregate:
    """aggregate() report shape."""

    def test_report_fields(self, project):
        report = aggregate(analyze_project(project))

        assert report["actionNeeded"] is True
        assert report["totals"] == {
            "packages": 5,
            "duplicates": 3,
            "native": 3,
            "nativeDuplicates": 2,
            "notHoisted": 0,
            "unresolvable": 1,
        }
        assert report["unresolvable"] == {
            "react-native-maps": "major versions 0.30.1 and 1.3.2 are unresolvable"
        }
        assert report["peerIssues"] == [
            {"package": "react-native-svg", "declared": "^12.0.0", "installed": ["13.4.0"]}
        ]
        json.dumps(report)
