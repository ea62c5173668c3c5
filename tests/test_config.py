import pytest

from usconst.config import (
    BuildPaths,
    DataPaths,
    LogConfig,
    get_build_paths,
    load_build_config,
    validate_config,
)
from usconst.exceptions import ConfigurationException, InvalidConfigurationException


def test_defaults_without_config_file(tmp_path):
    paths = get_build_paths(config_path=tmp_path / "absent.yaml")
    assert paths.data_file == DataPaths.CONSTITUTION_JSON
    assert paths.search_index.name == "search-index.json"
    assert paths.prerender_html.parent == paths.generated_dir


def test_yaml_paths_are_relative_to_the_config_file(tmp_path):
    config = tmp_path / "usconst.yaml"
    config.write_text("data_file: data/us.json\ndist_dir: /srv/site\n", encoding="utf-8")

    settings = load_build_config(config)
    assert settings["data_file"] == tmp_path / "data" / "us.json"
    assert str(settings["dist_dir"]) == "/srv/site"


def test_overrides_win_over_yaml(tmp_path):
    config = tmp_path / "usconst.yaml"
    config.write_text("data_file: data/us.json\n", encoding="utf-8")

    paths = get_build_paths(config_path=config, data_file=tmp_path / "other.json", llm_file=None)
    assert paths.data_file == tmp_path / "other.json"
    assert paths.llm_file == BuildPaths().llm_file


@pytest.mark.parametrize("content", ["- a\n- b\n", "site: x\n", "data_file: [unclosed\n"])
def test_invalid_yaml_config(tmp_path, content):
    config = tmp_path / "usconst.yaml"
    config.write_text(content, encoding="utf-8")
    with pytest.raises(InvalidConfigurationException):
        load_build_config(config)


def test_validate_config(build_paths):
    validate_config(build_paths)
    build_paths.data_file.unlink()
    with pytest.raises(ConfigurationException, match="Required file not found"):
        validate_config(build_paths)


def test_log_config_for_environments(monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)

    monkeypatch.setenv("USCONST_ENV", "test")
    assert LogConfig.get_config()["log_level"] == "WARNING"
    assert LogConfig.get_config()["enable_file"] is False

    monkeypatch.setenv("USCONST_ENV", "production")
    config = LogConfig.get_config()
    assert config["structured"] is True
    assert config["enable_file"] is True
