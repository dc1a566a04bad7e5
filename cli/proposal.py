import click

from cli.governance_cli_utils import contract_type_option, echo_tx, log_file_option, run_with_context
from governance.enums.proposal_type import ProposalType
from utils.formatter_utils import ZERO_ADDRESS, ZERO_HASH

PROPOSAL_TYPE_CHOICE = click.Choice([proposal_type.name for proposal_type in ProposalType if proposal_type])


@click.group()
def proposal():
    """Create, approve, execute and clean up governance proposals."""


@proposal.command("create")
@contract_type_option
@click.option("-t", "--type", "proposal_type", required=True, type=PROPOSAL_TYPE_CHOICE, help="Proposal type.")
@click.option("--target", required=True, type=str, help="Target address.")
@click.option("--id", "numeric_id", default=0, show_default=True, type=int, help="Cap or role scoped id.")
@click.option("--role", default=ZERO_HASH, show_default=True, type=str, help="Role name or role identifier.")
@click.option("--amount", default="0", show_default=True, type=str, help="Amount in whole tokens.")
@click.option("--token-address", default=ZERO_ADDRESS, show_default=True, type=str)
@log_file_option
def create(contract_type, proposal_type, target, numeric_id, role, amount, token_address, log_file):
    tx_hash = run_with_context(
        contract_type,
        log_file,
        lambda ctx: ctx.dispatcher.create_proposal(
            ProposalType[proposal_type], numeric_id, target, role, amount, token_address
        ),
    )
    echo_tx("createProposal", tx_hash)


@proposal.command("approve")
@contract_type_option
@click.argument("proposal_id")
@log_file_option
def approve(contract_type, proposal_id, log_file):
    tx_hash = run_with_context(contract_type, log_file, lambda ctx: ctx.dispatcher.approve_proposal(proposal_id))
    echo_tx("approveProposal", tx_hash)


@proposal.command("execute")
@contract_type_option
@click.argument("proposal_id")
@log_file_option
def execute(contract_type, proposal_id, log_file):
    tx_hash = run_with_context(contract_type, log_file, lambda ctx: ctx.dispatcher.execute_proposal(proposal_id))
    echo_tx("executeProposal", tx_hash)


@proposal.command("cleanup")
@contract_type_option
@click.option("-n", "--max-to-check", default=50, show_default=True, type=int, help="Max proposals to inspect.")
@log_file_option
def cleanup(contract_type, max_to_check, log_file):
    tx_hash = run_with_context(
        contract_type, log_file, lambda ctx: ctx.dispatcher.cleanup_expired_proposals(max_to_check)
    )
    echo_tx("cleanupExpiredProposals", tx_hash)
