"""Tests for YAML configuration loading and logging helpers."""

import logging
from pathlib import Path

import pytest

import constants
from constants import Constants, _load_yaml_config, apply_config, load_config
from common.logging_utils import Timer, configure_logging, extra_context, is_debug_enabled

TUNABLES = [
    "TAG_PREFIX",
    "BUILD_IDENTIFIER",
    "TAG_CHECK_TIMEOUT_SEC",
    "TAG_CHECK_RETRY_MAX",
    "TAG_CHECK_RETRY_BASE_DELAY_SEC",
]


@pytest.fixture(autouse=True)
def restore_constants():
    """Snapshot tunables so tests cannot leak overrides."""
    saved = {name: getattr(Constants, name) for name in TUNABLES}
    yield
    for name, value in saved.items():
        setattr(Constants, name, value)


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run with no env override and no default config files present."""
    monkeypatch.delenv(Constants.ENV_CONFIG_PATH, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Constants, "DEFAULT_CONFIG_PATHS", ["gitflow-version.yml"])
    return tmp_path


class TestLoadYamlConfig:
    """Test locating and parsing the YAML config file."""

    def test_explicit_path(self, tmp_path):
        cfg_file = tmp_path / "cfg.yml"
        cfg_file.write_text("tags:\n  prefix: release-\n", encoding="utf-8")
        assert _load_yaml_config(str(cfg_file)) == {"tags": {"prefix": "release-"}}

    def test_explicit_missing_path_warns(self, tmp_path, caplog):
        assert _load_yaml_config(str(tmp_path / "nope.yml")) == {}
        assert "Config file not found" in caplog.text

    def test_env_path(self, isolated_env, monkeypatch):
        cfg_file = isolated_env / "from-env.yaml"
        cfg_file.write_text("versioning:\n  build_identifier: ci\n", encoding="utf-8")
        monkeypatch.setenv(Constants.ENV_CONFIG_PATH, str(cfg_file))
        assert _load_yaml_config() == {"versioning": {"build_identifier": "ci"}}

    def test_default_location(self, isolated_env):
        (isolated_env / "gitflow-version.yml").write_text("tags:\n  retry_max: 5\n", encoding="utf-8")
        assert _load_yaml_config() == {"tags": {"retry_max": 5}}

    def test_nothing_found(self, isolated_env):
        assert _load_yaml_config() == {}

    def test_malformed_yaml(self, tmp_path, caplog):
        cfg_file = tmp_path / "bad.yml"
        cfg_file.write_text("tags: [unterminated\n", encoding="utf-8")
        assert _load_yaml_config(str(cfg_file)) == {}
        assert "Failed to load config" in caplog.text

    def test_non_mapping_top_level(self, tmp_path):
        cfg_file = tmp_path / "list.yml"
        cfg_file.write_text("- a\n- b\n", encoding="utf-8")
        assert _load_yaml_config(str(cfg_file)) == {}


class TestApplyConfig:
    """Test applying config sections onto Constants."""

    def test_applies_known_values(self):
        apply_config({
            "versioning": {"build_identifier": "ci"},
            "tags": {"prefix": "rel-", "timeout_sec": 2.5, "retry_max": 1, "retry_base_delay_sec": 0},
        })
        assert Constants.BUILD_IDENTIFIER == "ci"
        assert Constants.TAG_PREFIX == "rel-"
        assert Constants.TAG_CHECK_TIMEOUT_SEC == 2.5
        assert Constants.TAG_CHECK_RETRY_MAX == 1
        assert Constants.TAG_CHECK_RETRY_BASE_DELAY_SEC == 0

    def test_wrong_types_ignored(self, caplog):
        apply_config({"tags": {"prefix": 5, "retry_max": True}})
        assert Constants.TAG_PREFIX == "v"
        assert Constants.TAG_CHECK_RETRY_MAX == 3
        assert "Ignoring config value for TAG_PREFIX" in caplog.text

    def test_non_mapping_sections_ignored(self):
        apply_config({"tags": ["prefix"]})
        assert Constants.TAG_PREFIX == "v"

    def test_build_number_not_configurable(self):
        apply_config({"versioning": {"default_build_number": 1}})
        assert not hasattr(Constants, "DEFAULT_BUILD_NUMBER")

    def test_empty_config(self):
        apply_config({})
        assert Constants.BUILD_IDENTIFIER == "build"


def test_load_config_applies(tmp_path):
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("tags:\n  prefix: ''\n", encoding="utf-8")
    cfg = load_config(str(cfg_file))
    assert cfg == {"tags": {"prefix": ""}}
    assert Constants.TAG_PREFIX == ""


def test_module_exposes_default_paths():
    assert "gitflow-version.yml" in constants.Constants.DEFAULT_CONFIG_PATHS


class TestLoggingUtils:
    """Test the shared logging helpers."""

    def test_extra_context_drops_none(self):
        assert extra_context(event="resolve", build_number=None, tag="v1") == {
            "event": "resolve",
            "tag": "v1",
        }

    def test_is_debug_enabled(self):
        logger = logging.getLogger("gitflow.test.debug")
        logger.setLevel(logging.DEBUG)
        assert is_debug_enabled(logger) is True
        logger.setLevel(logging.INFO)
        assert is_debug_enabled(logger) is False

    def test_timer(self):
        with Timer() as t:
            inside = t.duration_ms()
        assert inside >= 0.0
        assert t.duration_ms() >= inside

    def test_timer_not_started(self):
        assert Timer().duration_ms() == 0.0

    def test_configure_logging_from_env(self, monkeypatch):
        root = logging.getLogger()
        previous = root.level
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "debug")
        try:
            configure_logging()
            assert root.level == logging.DEBUG
            configure_logging("warning")
            assert root.level == logging.WARNING
            configure_logging("bogus")
            assert root.level == logging.INFO
        finally:
            root.setLevel(previous)


def test_packaging_includes_common_namespace():
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    find = pyproject.read_text(encoding="utf-8").split("[tool.setuptools.packages.find]", 1)[1]
    assert "namespaces = true" in find.split("\n[", 1)[0]
    assert not (pyproject.parent / "src" / "common" / "__init__.py").exists()
