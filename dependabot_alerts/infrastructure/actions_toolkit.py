"""GitHub Actions runtime: inputs, outputs, workflow commands and job status."""

import json
import logging
import os
import sys
import uuid
from typing import Any, Dict, Optional, TextIO

from dependabot_alerts.domain.config import ActionInputs, DEFAULT_LOOKBACK_DAYS
from dependabot_alerts.domain.workflow_failure import RepositoryIdentity

logger = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _to_command_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


class ActionsToolkit:
    """
    Thin wrapper around the environment a GitHub Actions step runs in.

    Workflow commands are written to ``stream`` (stdout by default), outputs
    are appended to the file named by ``GITHUB_OUTPUT``. ``exit_code`` turns
    to 1 once :meth:`set_failed` has been called.
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None, stream: Optional[TextIO] = None):
        self.environ = environ if environ is not None else os.environ
        self.stream = stream
        self.exit_code = 0

    def _write(self, line: str):
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def _issue_command(self, command: str, message: str):
        self._write(f"::{command}::{_escape_data(message)}")

    def get_input(self, name: str, required: bool = False) -> str:
        """
        Read an action input from its ``INPUT_<NAME>`` environment variable.

        Args:
            name: Input name as declared in action.yml
            required: Raise if the input is missing or empty

        Returns:
            The input value with surrounding whitespace removed

        Raises:
            ValueError: If a required input is not supplied
        """
        key = f"INPUT_{name.replace(' ', '_').upper()}"
        value = self.environ.get(key, "").strip()
        if required and not value:
            raise ValueError(f"Input required and not supplied: {name}")
        return value

    def read_inputs(self) -> ActionInputs:
        """Read the inputs declared in action.yml, applying their defaults."""
        return ActionInputs(
            github_token=self.get_input("github_token", required=True),
            lookback_days=self.get_input("lookback_days") or DEFAULT_LOOKBACK_DAYS,
            fail_on_error=self.get_input("fail_on_error") == "true",
        )

    def repository(self) -> RepositoryIdentity:
        """Repository the workflow runs in, from GITHUB_REPOSITORY."""
        return RepositoryIdentity.from_slug(self.environ.get("GITHUB_REPOSITORY", ""))

    def set_output(self, name: str, value: Any):
        """
        Set a step output.

        Non-string values are JSON encoded. Falls back to the legacy
        ``set-output`` command when GITHUB_OUTPUT is not available.
        """
        text = _to_command_value(value)
        output_file = self.environ.get("GITHUB_OUTPUT")

        if not output_file:
            self._write(f"::set-output name={name}::{_escape_data(text)}")
            return

        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in text:
            raise ValueError(f"Unexpected input: output value contains the delimiter {delimiter}")

        with open(output_file, "a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
        logger.debug(f"Set output {name}")

    def add_mask(self, value: str):
        """Ask the runner to redact ``value`` from all subsequent log output."""
        if value:
            self._issue_command("add-mask", value)

    def info(self, message: str):
        self._write(message)
        logger.debug(f"info: {message}")

    def warning(self, message: str):
        self._issue_command("warning", message)
        logger.debug(f"warning: {message}")

    def error(self, message: str):
        self._issue_command("error", message)
        logger.debug(f"error: {message}")

    def set_failed(self, message: str):
        """Report an error annotation and mark the step as failed."""
        self.exit_code = 1
        self.error(message)
