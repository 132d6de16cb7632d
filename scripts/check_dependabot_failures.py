#!/usr/bin/env python3
"""Script to check for failed Dependabot workflow runs and report them to GitHub Actions."""

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dependabot_alerts.infrastructure.github_client import GitHubRestClient
from dependabot_alerts.infrastructure.actions_toolkit import ActionsToolkit
from dependabot_alerts.application.reporting_service import ReportingService

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main(toolkit=None, client_factory=GitHubRestClient):
    """Run the Dependabot failure check for the current repository."""
    toolkit = toolkit or ActionsToolkit()
    try:
        inputs = toolkit.read_inputs()
        toolkit.add_mask(inputs.github_token)

        service = ReportingService(client_factory, toolkit)
        service.run(inputs, toolkit.repository())

        return toolkit.exit_code

    except Exception as e:
        logger.error(f"Dependabot failure check failed: {e}", exc_info=True)
        toolkit.set_failed(str(e) or repr(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
