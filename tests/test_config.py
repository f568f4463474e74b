from optima_core.config import get_build_info, get_cached_build_info, get_settings


def test_build_info_defaults_when_env_is_empty() -> None:
    info = get_build_info()

    assert info.git_commit == "unknown"
    assert info.short_commit == "unknown"
    assert info.git_branch == "unknown"
    assert info.version == "0.0.0"
    assert info.environment == "development"
    assert info.deployment_id == ""
    assert info.build_date


def test_build_info_reads_environment(set_env) -> None:
    set_env(
        GIT_COMMIT="abc123def456",
        GIT_BRANCH="main",
        APP_VERSION="1.2.3",
        BUILD_DATE="2026-01-02T03:04:05Z",
        DEPLOYMENT_ID="blue",
        NODE_ENV="production",
    )

    info = get_build_info()

    assert info.git_commit == "abc123def456"
    assert info.short_commit == "abc123d"
    assert info.git_branch == "main"
    assert info.version == "1.2.3"
    assert info.build_date == "2026-01-02T03:04:05Z"
    assert info.deployment_id == "blue"
    assert info.environment == "production"


def test_environment_variable_takes_precedence_over_node_env(set_env) -> None:
    set_env(ENVIRONMENT="staging", NODE_ENV="production")
    assert get_build_info().environment == "staging"


def test_cached_build_info_is_computed_once(set_env, monkeypatch) -> None:
    set_env(APP_VERSION="1.0.0")
    first = get_cached_build_info()

    monkeypatch.setenv("APP_VERSION", "2.0.0")

    assert get_cached_build_info() is first
    assert first.version == "1.0.0"
    assert get_build_info().version == "2.0.0"


def test_debug_flag_is_true_only_for_literal_true(set_env) -> None:
    set_env(DEBUG="TRUE")
    assert get_settings().debug_mode is True

    set_env(DEBUG="*")
    assert get_settings().debug_mode is False


def test_infisical_detection(set_env) -> None:
    assert get_settings().infisical_enabled is False

    set_env(INFISICAL_CLIENT_ID="client-123")
    assert get_settings().infisical_enabled is True
