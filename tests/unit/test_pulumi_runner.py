"""
Unit tests for the Pulumi Automation API wrapper.
"""

import pytest
from unittest.mock import MagicMock, patch

from azure_app_stack.core.exceptions import PulumiCommandError
from azure_app_stack.pulumi_runner import PulumiRunner


class FakeCommandError(Exception):
    """Stand-in for pulumi.automation.CommandError."""


@pytest.fixture
def project_dir(tmp_path):
    (tmp_path / "Pulumi.yaml").write_text("name: azure-app-stack\nruntime: python\n")
    return tmp_path


@pytest.fixture
def mock_stack():
    return MagicMock()


@pytest.fixture
def runner(project_dir, mock_stack):
    with patch("azure_app_stack.pulumi_runner.auto.create_or_select_stack", return_value=mock_stack) as mock_select, \
         patch("azure_app_stack.pulumi_runner.auto.CommandError", FakeCommandError):
        runner = PulumiRunner(str(project_dir), "dev", on_output=None)
        runner.mock_select = mock_select
        yield runner


class TestPulumiRunnerInit:

    def test_requires_work_dir(self):
        with pytest.raises(ValueError, match="work_dir is required"):
            PulumiRunner("", "dev")

    def test_requires_stack_name(self, project_dir):
        with pytest.raises(ValueError, match="stack_name is required"):
            PulumiRunner(str(project_dir), "")

    def test_requires_pulumi_yaml(self, tmp_path):
        with pytest.raises(ValueError, match="No Pulumi.yaml found"):
            PulumiRunner(str(tmp_path), "dev")

    def test_stack_selected_lazily_once(self, runner, project_dir, mock_stack):
        runner.mock_select.assert_not_called()

        assert runner.stack is mock_stack
        assert runner.stack is mock_stack

        runner.mock_select.assert_called_once_with(stack_name="dev", work_dir=str(project_dir))


class TestPulumiRunnerCommands:

    def test_preview_returns_change_summary(self, runner, mock_stack):
        mock_stack.preview.return_value.change_summary = {"create": 12}

        assert runner.preview() == {"create": 12}
        mock_stack.preview.assert_called_once_with(on_output=None)

    def test_up_returns_plain_outputs(self, runner, mock_stack):
        mock_stack.up.return_value.outputs = {
            "BackendUrl": MagicMock(value="backend.azurewebsites.net", secret=False),
            "FrontendUrl": MagicMock(value="frontend.azurewebsites.net", secret=False),
        }
        mock_stack.up.return_value.summary.result = "succeeded"

        assert runner.up() == {
            "BackendUrl": "backend.azurewebsites.net",
            "FrontendUrl": "frontend.azurewebsites.net",
        }

    def test_refresh_and_destroy(self, runner, mock_stack):
        runner.refresh()
        runner.destroy()

        mock_stack.refresh.assert_called_once_with(on_output=None)
        mock_stack.destroy.assert_called_once_with(on_output=None)

    def test_outputs(self, runner, mock_stack):
        mock_stack.outputs.return_value = {"ResourceGroupName": MagicMock(value="rg1")}

        assert runner.outputs() == {"ResourceGroupName": "rg1"}

    def test_get_config_masks_secrets(self, runner, mock_stack):
        mock_stack.get_all_config.return_value = {
            "azure-app-stack:sqlAdmin": MagicMock(value="dbadmin", secret=False),
            "azure-app-stack:token": MagicMock(value="hidden", secret=True),
        }

        assert runner.get_config() == {
            "azure-app-stack:sqlAdmin": "dbadmin",
            "azure-app-stack:token": "[secret]",
        }

    def test_set_config(self, runner, mock_stack):
        with patch("azure_app_stack.pulumi_runner.auto.ConfigValue") as mock_value:
            runner.set_config("sqlAdmin", "dbadmin")

        mock_value.assert_called_once_with(value="dbadmin", secret=False)
        mock_stack.set_config.assert_called_once_with("sqlAdmin", mock_value.return_value)

    def test_set_config_requires_key(self, runner):
        with pytest.raises(ValueError, match="key is required"):
            runner.set_config("", "x")


class TestPulumiRunnerErrors:

    def test_command_error_is_translated(self, runner, mock_stack):
        mock_stack.up.side_effect = FakeCommandError("resource conflict")

        with pytest.raises(PulumiCommandError) as exc:
            runner.up()

        assert exc.value.command == "up"
        assert exc.value.stack_name == "dev"
        assert "resource conflict" in exc.value.stderr

    def test_stack_selection_error_is_translated(self, runner):
        runner.mock_select.side_effect = FakeCommandError("no backend")

        with pytest.raises(PulumiCommandError) as exc:
            runner.outputs()

        assert exc.value.command == "select"

    def test_other_errors_propagate(self, runner, mock_stack):
        mock_stack.destroy.side_effect = RuntimeError("unexpected")

        with pytest.raises(RuntimeError, match="unexpected"):
            runner.destroy()
