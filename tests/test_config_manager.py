"""Tests for ConfigManager and project root discovery"""

import pytest
import yaml

from aivsai.config.config_manager import ConfigManager, find_project_root
from aivsai.utils.errors import ConfigError, ConfigErrorKind


class TestDefaultConfig:
    def test_creates_default_config(self, home):
        cfg = ConfigManager()

        assert cfg.config_path == home / ".aivsai" / "config.yaml"
        assert cfg.config_path.exists()
        data = yaml.safe_load(cfg.config_path.read_text())
        assert data["roles"] == {"answerer": "moonshot", "reviewer": "deepseek"}
        assert set(data) == {"providers", "roles", "review", "chat", "conversations", "history"}

    def test_default_providers(self, home):
        cfg = ConfigManager()

        moonshot = cfg.get_provider_settings("moonshot")
        assert moonshot.endpoint == "https://api.moonshot.cn/v1/chat/completions"
        assert moonshot.model == "moonshot-v1-8k"
        assert moonshot.api_key_env == "MOONSHOT_API_KEY"

        deepseek = cfg.get_provider_settings("deepseek")
        assert deepseek.endpoint == "https://api.deepseek.com/chat/completions"
        assert deepseek.model == "deepseek-chat"
        assert deepseek.display_name == "DeepSeek AI"

    def test_dot_notation(self, home):
        cfg = ConfigManager()
        assert cfg.get("review.language") == "Chinese"
        assert cfg.get("chat.temperature") == 0.7
        assert cfg.get("does.not.exist", "fallback") == "fallback"

    def test_paths(self, home):
        cfg = ConfigManager()
        assert cfg.credentials_path == home / ".ai_vs_ai_config"
        assert cfg.history_path == home / ".aivsai" / "history"


class TestCustomConfig:
    def test_explicit_path(self, config_file, conversations_dir):
        cfg = ConfigManager(str(config_file))
        assert cfg.config_path == config_file
        assert cfg.conversations_dir() == conversations_dir
        assert cfg.history_path is None

    def test_roles_can_be_swapped(self, home):
        path = home / "swapped.yaml"
        data = ConfigManager.default_config()
        data["roles"] = {"answerer": "deepseek", "reviewer": "moonshot"}
        path.write_text(yaml.safe_dump(data))

        cfg = ConfigManager(str(path))
        assert cfg.answerer_name == "deepseek"
        assert cfg.reviewer_name == "moonshot"

    def test_unknown_provider(self, config_manager):
        with pytest.raises(ConfigError) as exc_info:
            config_manager.get_provider_settings("openai")
        assert exc_info.value.kind is ConfigErrorKind.UNKNOWN_PROVIDER
        assert exc_info.value.provider == "openai"

    def test_invalid_yaml(self, home):
        path = home / "broken.yaml"
        path.write_text("providers: [unclosed")
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(str(path))
        assert exc_info.value.kind is ConfigErrorKind.INVALID_SETTINGS

    def test_missing_required_fields(self, home):
        path = home / "partial.yaml"
        path.write_text(yaml.safe_dump({"providers": {"moonshot": {"model": "x"}}}))
        with pytest.raises(ConfigError):
            ConfigManager(str(path))

    def test_non_mapping(self, home):
        path = home / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            ConfigManager(str(path))


class TestFindProjectRoot:
    def test_finds_marker_in_ancestor(self, tmp_path):
        project = tmp_path / "project"
        nested = project / "src" / "pkg"
        nested.mkdir(parents=True)
        (project / "pyproject.toml").write_text("[project]\n")

        assert find_project_root(nested) == project.resolve()

    def test_git_directory_marker(self, tmp_path):
        project = tmp_path / "repo"
        (project / ".git").mkdir(parents=True)
        assert find_project_root(project) == project.resolve()

    def test_conversations_dir_uses_project_root(self, home, tmp_path):
        project = tmp_path / "project"
        nested = project / "docs"
        nested.mkdir(parents=True)
        (project / "pyproject.toml").write_text("[project]\n")

        cfg = ConfigManager()
        assert cfg.conversations_dir(nested) == project.resolve() / "conversations"
