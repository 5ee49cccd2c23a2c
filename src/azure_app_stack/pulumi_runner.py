"""
Pulumi Automation API wrapper.

This module provides a Python interface to the Pulumi engine so the CLI can
preview, deploy and tear down the stack without shelling out to the pulumi
binary directly. The program itself is the local project in ``work_dir``
(Pulumi.yaml + __main__.py).

Usage:
    from azure_app_stack.pulumi_runner import PulumiRunner

    runner = PulumiRunner(work_dir="/app", stack_name="dev")
    runner.preview()
    runner.up()
    outputs = runner.outputs()
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from pulumi import automation as auto

from azure_app_stack.core.exceptions import PulumiCommandError

logger = logging.getLogger(__name__)


def _print_line(line: str) -> None:
    print(line, end="" if line.endswith("\n") else "\n", flush=True)


class PulumiRunner:
    """
    Wraps Pulumi Automation API calls for one stack of the local project.

    Attributes:
        work_dir: Directory containing Pulumi.yaml
        stack_name: Name of the stack to operate on (e.g. "dev")
    """

    def __init__(
        self,
        work_dir: str,
        stack_name: str,
        on_output: Optional[Callable[[str], None]] = _print_line,
    ):
        """
        Initialize the runner.

        Args:
            work_dir: Path to the project directory (must contain Pulumi.yaml)
            stack_name: Stack to select, created when it does not exist yet
            on_output: Callback receiving engine output line by line

        Raises:
            ValueError: If work_dir or stack_name is empty, or work_dir has
                no Pulumi.yaml
        """
        if not work_dir:
            raise ValueError("work_dir is required")
        if not stack_name:
            raise ValueError("stack_name is required")

        self.work_dir = Path(work_dir)
        self.stack_name = stack_name
        self._on_output = on_output
        self._stack: Optional[auto.Stack] = None

        if not (self.work_dir / "Pulumi.yaml").exists():
            raise ValueError(f"No Pulumi.yaml found in: {work_dir}")

    @property
    def stack(self) -> auto.Stack:
        """Get the selected stack, selecting or creating it on first use."""
        if self._stack is None:
            logger.debug(f"Selecting stack '{self.stack_name}' in {self.work_dir}")
            self._stack = self._run(
                "select",
                lambda: auto.create_or_select_stack(
                    stack_name=self.stack_name,
                    work_dir=str(self.work_dir),
                ),
            )
        return self._stack

    def _run(self, command: str, action: Callable[[], Any]) -> Any:
        """
        Run one Automation API call, translating engine failures.

        Raises:
            PulumiCommandError: If the engine reports a failure
        """
        try:
            return action()
        except auto.CommandError as e:
            raise PulumiCommandError(command, self.stack_name, str(e)) from e

    def preview(self) -> Dict[str, int]:
        """
        Preview the changes an update would make.

        Returns:
            Change summary, e.g. {"create": 12}
        """
        logger.info(f"Previewing stack '{self.stack_name}'...")
        result = self._run("preview", lambda: self.stack.preview(on_output=self._on_output))
        logger.info("✓ Preview complete")
        return dict(result.change_summary or {})

    def up(self) -> Dict[str, Any]:
        """
        Deploy the stack.

        Returns:
            Plain stack outputs after the update
        """
        logger.info(f"Updating stack '{self.stack_name}'...")
        result = self._run("up", lambda: self.stack.up(on_output=self._on_output))
        logger.info(f"✓ Update complete ({result.summary.result})")
        return _plain_outputs(result.outputs)

    def refresh(self) -> None:
        """Refresh the stack state from the actual cloud resources."""
        logger.info(f"Refreshing stack '{self.stack_name}'...")
        self._run("refresh", lambda: self.stack.refresh(on_output=self._on_output))
        logger.info("✓ Refresh complete")

    def destroy(self) -> None:
        """Destroy all resources of the stack."""
        logger.info(f"Destroying stack '{self.stack_name}'...")
        self._run("destroy", lambda: self.stack.destroy(on_output=self._on_output))
        logger.info("✓ Destroy complete")

    def outputs(self) -> Dict[str, Any]:
        """Get the current stack outputs as plain values."""
        return _plain_outputs(self._run("outputs", lambda: self.stack.outputs()))

    def get_config(self) -> Dict[str, Any]:
        """
        Get the stack configuration.

        Returns:
            Mapping of config key to value, secrets masked as "[secret]"
        """
        config = self._run("config", lambda: self.stack.get_all_config())
        return {
            key: "[secret]" if value.secret else value.value
            for key, value in config.items()
        }

    def set_config(self, key: str, value: str, secret: bool = False) -> None:
        """Set one stack configuration value."""
        if not key:
            raise ValueError("key is required")
        logger.info(f"Setting config '{key}' on stack '{self.stack_name}'")
        self._run(
            "config",
            lambda: self.stack.set_config(key, auto.ConfigValue(value=value, secret=secret)),
        )


def _plain_outputs(outputs: Dict[str, Any]) -> Dict[str, Any]:
    """Unwrap Automation API OutputValue objects."""
    return {key: output.value for key, output in (outputs or {}).items()}
