"""
Unit tests for configuration module
"""

from config.config import BASE_DIR, LOG_DIR, Config, get_config, reload_config

ALL_VARS = [
    "NEO4J_URI",
    "NEO4J_USERNAME",
    "NEO4J_PASSWORD",
    "NEO4J_DATABASE",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_TEMPERATURE",
    "PERSIST_EXTRACTED_SKILLS",
    "LOG_LEVEL",
    "LOG_DIR",
    "LOG_FILE_RETENTION_DAYS",
]


class TestConfigLoading:
    """Test configuration loading from environment"""

    def test_config_loads_env_variables(self, mock_env):
        """Test that Config loads values from environment variables"""
        config = Config()

        assert config.neo4j_uri == "neo4j://localhost:7687"
        assert config.neo4j_username == "neo4j"
        assert config.neo4j_password == "test_password"
        assert config.neo4j_database == "neo4j"
        assert config.openai_api_key == "test-api-key"
        assert config.openai_model == "gpt-4o"
        assert config.openai_temperature == 0.0
        assert config.persist_extracted_skills is False
        assert str(config.log_dir) == mock_env["LOG_DIR"]

    def test_config_default_values(self, monkeypatch):
        """Test that Config has sensible defaults"""
        for name in ALL_VARS:
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.neo4j_uri == ""
        assert config.neo4j_database == "neo4j"
        assert config.openai_model == "gpt-4o"
        assert config.openai_temperature == 0.0
        assert config.persist_extracted_skills is False
        assert config.log_level == "INFO"
        assert config.log_dir == LOG_DIR
        assert config.log_file_retention_days == 30

    def test_persist_flag_enabled(self, mock_env, monkeypatch):
        monkeypatch.setenv("PERSIST_EXTRACTED_SKILLS", "TRUE")

        assert Config().persist_extracted_skills is True

    def test_relative_log_dir_resolves_against_repo(self, mock_env, monkeypatch):
        monkeypatch.setenv("LOG_DIR", "custom_logs")

        assert Config().log_dir == (BASE_DIR / "custom_logs").resolve()


class TestConfigValidation:
    """Test configuration validation"""

    def test_validate_missing_required_fields(self, monkeypatch):
        """Test validation names every missing connection setting"""
        for name in ("NEO4J_URI", "NEO4J_USERNAME", "NEO4J_PASSWORD", "OPENAI_API_KEY"):
            monkeypatch.setenv(name, "")

        errors = Config().validate()

        assert errors == [
            "Please set the environment variable 'NEO4J_URI'",
            "Please set the environment variable 'NEO4J_USERNAME'",
            "Please set the environment variable 'NEO4J_PASSWORD'",
            "Please set the environment variable 'OPENAI_API_KEY'",
        ]

    def test_validate_single_missing_field(self, mock_env, monkeypatch):
        monkeypatch.setenv("NEO4J_PASSWORD", "")

        errors = Config().validate()

        assert errors == ["Please set the environment variable 'NEO4J_PASSWORD'"]

    def test_validate_invalid_temperature(self, mock_env, monkeypatch):
        monkeypatch.setenv("OPENAI_TEMPERATURE", "3.5")

        errors = Config().validate()

        assert any("must be between 0 and 2" in err for err in errors)

    def test_validate_success(self, mock_env):
        assert Config().validate() == []

    def test_validate_without_openai_skips_key(self, mock_env, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "")

        config = Config()

        assert config.validate(require_openai=False) == []
        assert config.validate() == ["Please set the environment variable 'OPENAI_API_KEY'"]


class TestGlobalConfig:
    """Test global config instance management"""

    def test_get_config_returns_singleton(self, mock_env):
        config1 = get_config()
        config2 = get_config()

        assert config1 is config2

    def test_reload_config_creates_new_instance(self, mock_env):
        config1 = get_config()
        config2 = reload_config()

        assert config1 is not config2
