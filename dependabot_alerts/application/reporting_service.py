"""Application service that runs the Dependabot failure check and reports the result."""

import json
import logging
from typing import Callable

from dependabot_alerts.application.failure_query import check_dependabot_failures
from dependabot_alerts.domain.config import ActionInputs
from dependabot_alerts.domain.workflow_failure import CheckResult, RepositoryIdentity

logger = logging.getLogger(__name__)


class InvalidLookbackDays(ValueError):
    """Raised when lookback_days is not a positive integer."""

    def __init__(self, raw_value: str):
        super().__init__(f"Invalid lookback_days: \"{raw_value}\" - must be a positive integer")
        self.raw_value = raw_value


def parse_lookback_days(raw_value: str) -> int:
    """
    Parse the lookback_days input.

    Args:
        raw_value: Input as supplied to the action

    Returns:
        Number of days, at least 1

    Raises:
        InvalidLookbackDays: If the value is not an integer or is below 1
    """
    try:
        days = int(raw_value)
    except (TypeError, ValueError):
        raise InvalidLookbackDays(raw_value) from None

    if days < 1:
        raise InvalidLookbackDays(raw_value)
    return days


def failure_summary(result: CheckResult) -> str:
    return f"Found {result.failure_count} Dependabot workflow failure(s)"


class ReportingService:
    """Service for checking Dependabot failures and publishing them as step outputs."""

    def __init__(self, client_factory: Callable, sink):
        """
        Initialize reporting service.

        Args:
            client_factory: Callable building a GitHub client from a token
            sink: Output sink with set_output, info, warning and set_failed
                methods, e.g. ActionsToolkit
        """
        self.client_factory = client_factory
        self.sink = sink

    def run(self, inputs: ActionInputs, repository: RepositoryIdentity) -> CheckResult:
        """
        Check ``repository`` for Dependabot failures and report them.

        Outputs and warnings are always published before the step is marked
        as failed. Errors from the GitHub API propagate unchanged and leave
        the outputs unset.

        Args:
            inputs: Action inputs
            repository: Repository the workflow runs in

        Returns:
            The check result
        """
        lookback_days = parse_lookback_days(inputs.lookback_days)

        client = self.client_factory(inputs.github_token)
        logger.info(f"Checking {repository.full_name} for Dependabot failures in the last {lookback_days} day(s)")
        result = check_dependabot_failures(client, repository, lookback_days)

        self.sink.set_output("failure_count", result.failure_count)
        self.sink.set_output("has_failures", "true" if result.has_failures else "false")
        self.sink.set_output("failures_json", json.dumps([failure.to_dict() for failure in result.failures]))

        if result.has_failures:
            self.sink.warning(failure_summary(result))
            for failure in result.failures:
                self.sink.warning(f"  - {failure.name}: {failure.html_url}")

            if inputs.fail_on_error:
                self.sink.set_failed(failure_summary(result))
        else:
            self.sink.info("No Dependabot workflow failures found")

        return result
