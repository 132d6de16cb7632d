"""Query GitHub Actions for workflow runs that Dependabot triggered and that failed."""

from datetime import date, datetime, timedelta, timezone
from typing import Optional

from dependabot_alerts.domain.workflow_failure import CheckResult, FailureRecord, RepositoryIdentity

DEPENDABOT_ACTOR = "dependabot[bot]"
FAILURE_STATUS = "failure"


def cutoff_date(lookback_days: int, today: Optional[date] = None) -> date:
    """First calendar day (UTC) inside the lookback window."""
    if today is None:
        today = datetime.now(timezone.utc).date()
    return today - timedelta(days=lookback_days)


def created_filter(lookback_days: int, today: Optional[date] = None) -> str:
    """
    Build the ``created`` filter for the workflow runs endpoint.

    GitHub's ``>=`` date qualifier includes the boundary day.
    """
    return f">={cutoff_date(lookback_days, today).isoformat()}"


def check_dependabot_failures(
    client,
    repository: RepositoryIdentity,
    lookback_days: int,
    today: Optional[date] = None
) -> CheckResult:
    """
    Find failed workflow runs triggered by Dependabot.

    All filtering (actor, status, created date) is done by the API; this
    function only shapes the response. ``lookback_days`` must already be a
    positive integer. Errors raised by ``client`` are not caught.

    Args:
        client: Object with a ``list_workflow_runs`` method, e.g. GitHubRestClient
        repository: Repository to query
        lookback_days: Number of trailing days to include
        today: Reference date, defaults to the current UTC date

    Returns:
        CheckResult with the failures in the order returned by GitHub
    """
    runs = client.list_workflow_runs(
        repository.owner,
        repository.name,
        actor=DEPENDABOT_ACTOR,
        status=FAILURE_STATUS,
        created=created_filter(lookback_days, today),
    )

    return CheckResult(failures=tuple(FailureRecord.from_workflow_run(run) for run in runs))
