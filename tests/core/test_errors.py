"""Tests for error types and codes."""

import json

import pytest

from gitsql.core.errors import ConfigError, ErrorCode, GitSqlError


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize("code", list(ErrorCode))
    def test_given_config_code_when_checked_then_in_2xxx_range(self, code: ErrorCode) -> None:
        """Config error codes fall within 2000-2999."""
        # When
        value = int(code)

        # Then
        assert 2000 <= value < 3000


class TestGitSqlError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """to_dict carries the code's name and number plus details."""
        # Given
        error = GitSqlError(ErrorCode.CONFIG_PARSE_ERROR, "Test message", {"key": "value"})

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "error": "CONFIG_PARSE_ERROR",
            "code": 2001,
            "message": "Test message",
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_names_code(self) -> None:
        # Given
        error = GitSqlError(ErrorCode.CONFIG_INVALID_VALUE, "Bad value")

        # When
        result = str(error)

        # Then
        assert result == "CONFIG_INVALID_VALUE (2002): Bad value"

    def test_given_error_when_raised_then_catchable(self) -> None:
        # Given
        error = GitSqlError(ErrorCode.CONFIG_PARSE_ERROR, "boom")

        # When / Then
        with pytest.raises(GitSqlError) as exc_info:
            raise error
        assert exc_info.value.code is ErrorCode.CONFIG_PARSE_ERROR


class TestConfigError:
    """ConfigError factory method tests."""

    def test_given_yaml_failure_when_created_then_includes_path(self) -> None:
        # Given
        path = "/repo/.gitsql/config.yaml"

        # When
        error = ConfigError.yaml_error(path, "bad indent")

        # Then
        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert path in error.message
        assert error.details == {"path": path, "reason": "bad indent"}

    def test_given_invalid_field_when_serialized_then_value_kept(self) -> None:
        """The offending value survives a JSON round trip for --json callers."""
        # Given
        error = ConfigError.invalid_field("traversal.max_tag_chain", 0, "must be >= 1")

        # When
        payload = json.loads(json.dumps(error.to_dict()))

        # Then
        assert payload["error"] == "CONFIG_INVALID_VALUE"
        assert payload["details"]["field"] == "traversal.max_tag_chain"
        assert payload["details"]["value"] == 0
        assert error.message == "traversal.max_tag_chain = 0: must be >= 1"

    def test_given_missing_file_when_created_then_not_found_code(self) -> None:
        # When
        error = ConfigError.missing_file("/tmp/missing.yaml")

        # Then
        assert error.code == ErrorCode.CONFIG_FILE_NOT_FOUND
        assert isinstance(error, GitSqlError)
