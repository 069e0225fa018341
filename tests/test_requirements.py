"""Tests for requirement checks and Homebrew installers."""

from unittest.mock import Mock

import pytest

from devtools_cli.exceptions import InstallError, RequirementFailedError
from devtools_cli.requirements import (
    InstallAction,
    RequirementCheck,
    command_exists,
    command_exists_with_brew,
    env_var_set,
    first_failed_requirement,
)


@pytest.fixture
def mock_which(mocker):
    return mocker.patch("devtools_cli.requirements.shutil.which")


@pytest.fixture
def mock_run(mocker):
    run = mocker.patch("devtools_cli.requirements.subprocess.run")
    run.return_value.returncode = 0
    return run


class TestFirstFailedRequirement:
    def test_all_pass(self):
        checks = [RequirementCheck(name="a", validate=Mock()), RequirementCheck(name="b")]
        assert first_failed_requirement(checks) is None

    def test_empty_sequence_passes(self):
        assert first_failed_requirement([]) is None

    def test_stops_at_first_failure(self):
        installer = InstallAction(label="fix", run=lambda: "")
        error = RequirementFailedError("b", "b missing")
        later = Mock()
        checks = [
            RequirementCheck(name="a", validate=Mock()),
            RequirementCheck(name="b", validate=Mock(side_effect=error), installer=installer),
            RequirementCheck(name="c", validate=later),
        ]

        failure = first_failed_requirement(checks)

        assert failure.check is checks[1]
        assert failure.error is error
        assert failure.installer is installer
        later.assert_not_called()

    def test_any_exception_counts_as_failure(self):
        failure = first_failed_requirement(
            [RequirementCheck(name="x", validate=Mock(side_effect=OSError("nope")))]
        )
        assert str(failure.error) == "nope"
        assert failure.installer is None


class TestCommandExists:
    def test_present(self, mock_which):
        mock_which.return_value = "/usr/bin/aws"
        command_exists("aws").run()
        mock_which.assert_called_once_with("aws")

    def test_missing(self, mock_which):
        mock_which.return_value = None
        with pytest.raises(RequirementFailedError, match="required command 'aws' is not installed"):
            command_exists("aws").run()

    def test_checked_on_every_run(self, mock_which):
        mock_which.side_effect = [None, "/usr/bin/aws"]
        check = command_exists("aws")

        with pytest.raises(RequirementFailedError):
            check.run()
        check.run()


class TestBrewInstaller:
    def test_installer_label(self):
        check = command_exists_with_brew("aws", "awscli")
        assert check.installer.label == "Install aws with Homebrew"
        assert check.name == "aws"

    def test_install_runs_brew(self, mock_which, mock_run):
        mock_which.return_value = "/opt/homebrew/bin/brew"

        output = command_exists_with_brew("aws", "awscli").installer.run()

        mock_run.assert_called_once_with(["brew", "install", "awscli"], check=False)
        assert output == "Installed 'awscli' with Homebrew."

    def test_install_without_brew(self, mock_which, mock_run):
        mock_which.return_value = None

        with pytest.raises(InstallError, match="homebrew is required for auto-install of 'awscli'"):
            command_exists_with_brew("aws", "awscli").installer.run()

        mock_run.assert_not_called()

    def test_install_nonzero_exit(self, mock_which, mock_run):
        mock_which.return_value = "/opt/homebrew/bin/brew"
        mock_run.return_value.returncode = 1

        with pytest.raises(InstallError, match="exit code 1") as excinfo:
            command_exists_with_brew("az", "azure-cli").installer.run()

        assert excinfo.value.target == "azure-cli"


class TestEnvVarSet:
    def test_set(self, monkeypatch):
        monkeypatch.setenv("DEVTOOLS_TEST_VAR", "value")
        env_var_set("DEVTOOLS_TEST_VAR").run()

    @pytest.mark.parametrize("value", [None, ""])
    def test_unset_or_empty(self, monkeypatch, value):
        if value is None:
            monkeypatch.delenv("DEVTOOLS_TEST_VAR", raising=False)
        else:
            monkeypatch.setenv("DEVTOOLS_TEST_VAR", value)

        with pytest.raises(RequirementFailedError, match="DEVTOOLS_TEST_VAR"):
            env_var_set("DEVTOOLS_TEST_VAR").run()
