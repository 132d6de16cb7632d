"""Typed action inputs."""

from dataclasses import dataclass, field

DEFAULT_LOOKBACK_DAYS = "7"


@dataclass(frozen=True)
class ActionInputs:
    """
    Inputs of a single action run.

    ``lookback_days`` stays a raw string here; it is validated by the
    reporting service so that the offending value can be reported verbatim.
    """

    github_token: str = field(repr=False)
    lookback_days: str = DEFAULT_LOOKBACK_DAYS
    fail_on_error: bool = False
