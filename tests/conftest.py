"""Shared fixtures for lockfile, manifest and install tree tests."""

import json

import pytest

from rn_dedupe.config import CONFIG_PATH_ENV_VAR

YARN_LOCK = """# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
# yarn lockfile v1


"@babel/core@^7.0.0":
  version "7.20.0"
  resolved "https://registry.yarnpkg.com/@babel/core/-/core-7.20.0.tgz#abc"
  dependencies:
    lodash "^4.17.0"

lodash@^4.17.0, lodash@^4.17.21:
  version "4.17.21"
  resolved "https://registry.yarnpkg.com/lodash/-/lodash-4.17.21.tgz#def"

lodash@4.17.15:
  version "4.17.15"
  resolved "https://registry.yarnpkg.com/lodash/-/lodash-4.17.15.tgz#ghi"

react-native-camera@^3.0.0:
  version "3.40.0"

react-native-camera@3.30.0:
  version "3.30.0"

react-native-maps@^0.30.0:
  version "0.30.1"

react-native-maps@^1.3.0:
  version "1.3.2"

react-native-svg@^13.0.0:
  version "13.4.0"
"""


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv("RN_DEDUPE_WARN_ONLY", raising=False)


@pytest.fixture
def yarn_lock_text():
    return YARN_LOCK


@pytest.fixture
def install_package(tmp_path):
    """Create ``node_modules/<name>`` with the given files under ``tmp_path``."""

    def _install(name, files=None, modules_dir="node_modules"):
        package_root = tmp_path / modules_dir / name
        package_root.mkdir(parents=True, exist_ok=True)
        for relative, content in (files or {}).items():
            target = package_root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return package_root

    return _install


@pytest.fixture
def write_manifest(tmp_path):
    """Write ``package.json`` under ``tmp_path`` and return its path."""

    def _write(data):
        path = tmp_path / "package.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def project(tmp_path, yarn_lock_text, install_package, write_manifest):
    """A project with a lockfile, manifest and a small native install tree."""
    (tmp_path / "yarn.lock").write_text(yarn_lock_text, encoding="utf-8")
    write_manifest(
        {
            "name": "app",
            "version": "1.0.0",
            "peerDependencies": {"react-native-svg": "^12.0.0"},
        }
    )
    install_package(
        "react-native-camera",
        {"android/src/main/java/CameraModule.java": "class CameraModule extends ReactContextBaseJavaModule {}"},
    )
    install_package(
        "react-native-maps",
        {"ios/AIRMapManager.h": "@interface AIRMapManager : NSObject <RCTBridgeModule>"},
    )
    install_package(
        "react-native-svg",
        {"apple/RNSVGRenderable.m": "@implementation RNSVGRenderable <RCTBridgeModule>"},
    )
    install_package("lodash", {"lodash.js": "module.exports = {};"})
    install_package("@babel/core", {"lib/index.js": "exports.transform = () => {};"})
    return tmp_path
