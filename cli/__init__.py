import click

from cli.admin_actions import cancel_transaction, emergency_action, transaction_details, upgrade_contract
from cli.proposal import proposal
from cli.role import role
from cli.sync_governance import sync_governance


@click.group()
@click.version_option(version="1.0.0")
@click.pass_context
def cli(ctx):
    pass


# Snapshot
cli.add_command(sync_governance, "sync_governance")

# Proposals
cli.add_command(proposal, "proposal")

# Role configuration
cli.add_command(role, "role")

# Contract administration
cli.add_command(emergency_action, "emergency_action")
cli.add_command(upgrade_contract, "upgrade_contract")

# Transactions
cli.add_command(cancel_transaction, "cancel_transaction")
cli.add_command(transaction_details, "transaction_details")
