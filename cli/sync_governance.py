import time

import click

from cli.governance_cli_utils import contract_type_option, echo_json, log_file_option, run_with_context
from governance.service.governance_factory import GovernanceContext
from utils.logger_utils import get_logger

logger = get_logger("Sync Governance CLI")


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@contract_type_option
@click.option("--actionable-only", is_flag=True, default=False, help="Only list pending, unexpired proposals.")
@log_file_option
def sync_governance(contract_type: str, actionable_only: bool, log_file: str):
    """
    Rebuilds the governance snapshot (proposals, role configs, caps, sets, bridge history) and prints it as JSON.
    """

    async def _sync(context: GovernanceContext):
        return await context.synchronizer.refresh()

    snapshot = run_with_context(contract_type, log_file, _sync)
    if snapshot is None:
        return

    now = int(time.time())
    payload = snapshot.model_dump(mode="json", exclude={"proposals"})
    states = snapshot.proposal_states(now)
    if actionable_only:
        states = [s for s in states if s["status"] == 0 and not s["is_expired"]]
    payload["proposals"] = states
    echo_json(payload)
