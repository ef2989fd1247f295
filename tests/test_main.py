"""Tests for the command line entry point."""
import pytest

from casedevmcp.main import apply_client_options, parse_args


def test_client_options_reach_config():
    env = {}
    args = parse_args(
        [
            "--api-url",
            "https://staging.case.dev",
            "--timeout-ms",
            "5000",
            "--transfer-timeout-ms",
            "90000",
            "--verify-uploads",
        ]
    )

    config = apply_client_options(args, env)

    assert env == {
        "CASEDEV_API_URL": "https://staging.case.dev",
        "CASEDEV_TIMEOUT_MS": "5000",
        "CASEDEV_TRANSFER_TIMEOUT_MS": "90000",
        "CASEDEV_VERIFY_UPLOADS": "true",
    }
    assert config.base_url == "https://staging.case.dev"
    assert config.timeout_ms == 5000
    assert config.transfer_timeout_ms == 90000
    assert config.verify_uploads is True


def test_unset_options_keep_environment():
    env = {"CASEDEV_TIMEOUT_MS": "12000"}

    config = apply_client_options(parse_args([]), env)

    assert env == {"CASEDEV_TIMEOUT_MS": "12000"}
    assert config.timeout_ms == 12000
    assert config.verify_uploads is False


def test_invalid_timeout_is_rejected():
    with pytest.raises(ValueError):
        apply_client_options(parse_args(["--timeout-ms", "0"]), {})
