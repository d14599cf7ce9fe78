from __future__ import annotations

import os
from pathlib import Path

import pytest

from gitkit.config import GitkitConfig, get_user_config_path, load_config
from gitkit.exceptions import ConfigError


def test_load_defaults_when_no_config(clean_env: None, temp_dir: Path) -> None:
    """Test that defaults are used when no config file exists."""
    os.chdir(temp_dir)

    config = load_config()
    assert isinstance(config, GitkitConfig)
    assert config.git_binary == "git"
    assert config.timeout_seconds == 120.0
    assert config.network_timeout_seconds == 600.0
    assert config.untracked_concurrency == 1
    assert config.verbosity == "warning"


def test_load_project_config(clean_env: None, temp_dir: Path) -> None:
    """Test loading configuration from gitkit.yaml."""
    os.chdir(temp_dir)
    (temp_dir / "gitkit.yaml").write_text(
        "timeout_seconds: 30\nuntracked_concurrency: 4\nverbosity: info\n"
    )

    config = load_config()
    assert config.timeout_seconds == 30.0
    assert config.untracked_concurrency == 4
    assert config.verbosity == "info"


def test_explicit_config_path(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "gitkit.yaml").write_text("git_binary: /ignored/git\n")
    explicit = temp_dir / "custom.yaml"
    explicit.write_text("git_binary: /opt/git/bin/git\n")

    config = load_config(explicit)
    assert config.git_binary == "/opt/git/bin/git"


def test_missing_explicit_path_uses_defaults(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)

    config = load_config(temp_dir / "absent.yaml")
    assert config.git_binary == "git"


def test_user_config_is_lowest_file_priority(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    user_config = get_user_config_path()
    user_config.parent.mkdir(parents=True)
    user_config.write_text("timeout_seconds: 45\nuntracked_concurrency: 2\n")
    (temp_dir / "gitkit.yaml").write_text("untracked_concurrency: 8\n")

    config = load_config()
    assert config.timeout_seconds == 45.0
    assert config.untracked_concurrency == 8


def test_env_var_overrides(
    clean_env: None, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test that GITKIT_* environment variables override config files."""
    os.chdir(temp_dir)
    (temp_dir / "gitkit.yaml").write_text("untracked_concurrency: 4\n")
    monkeypatch.setenv("GITKIT_UNTRACKED_CONCURRENCY", "6")
    monkeypatch.setenv("GITKIT_NETWORK_TIMEOUT_SECONDS", "90")

    config = load_config()
    assert config.untracked_concurrency == 6
    assert config.network_timeout_seconds == 90.0


def test_invalid_config_raises_config_error(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "gitkit.yaml").write_text("untracked_concurrency: 0\n")

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "untracked_concurrency"
    assert exc_info.value.value == 0


def test_blank_git_binary_rejected(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "gitkit.yaml").write_text("git_binary: '  '\n")

    with pytest.raises(ConfigError) as exc_info:
        load_config()

    assert exc_info.value.field == "git_binary"


def test_invalid_yaml(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "gitkit.yaml").write_text("timeout_seconds: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config()


def test_non_mapping_yaml(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "gitkit.yaml").write_text("- just\n- a list\n")

    with pytest.raises(ConfigError, match="must contain a mapping"):
        load_config()


def test_empty_yaml_is_ignored(clean_env: None, temp_dir: Path) -> None:
    os.chdir(temp_dir)
    (temp_dir / "gitkit.yaml").write_text("")

    assert load_config().untracked_concurrency == 1


def test_user_config_path(clean_env: None, temp_dir: Path) -> None:
    expected = temp_dir / "home" / ".config" / "gitkit" / "config.yaml"
    assert get_user_config_path() == expected
