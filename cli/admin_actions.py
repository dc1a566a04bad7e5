import click

from cli.governance_cli_utils import contract_type_option, echo_json, echo_tx, log_file_option, run_with_context
from governance.enums.operation import EmergencyOp


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@contract_type_option
@click.argument("operation", type=click.Choice([op.name.lower() for op in EmergencyOp]))
@log_file_option
def emergency_action(contract_type, operation, log_file):
    """Pauses or unpauses the governance target."""
    op = EmergencyOp[operation.upper()]
    tx_hash = run_with_context(contract_type, log_file, lambda ctx: ctx.dispatcher.emergency_action(op))
    echo_tx("emergencyAction", tx_hash)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@contract_type_option
@click.argument("new_implementation")
@log_file_option
def upgrade_contract(contract_type, new_implementation, log_file):
    """Upgrades the proxy to NEW_IMPLEMENTATION (no init call) and reports the pending implementation."""
    result = run_with_context(contract_type, log_file, lambda ctx: ctx.dispatcher.upgrade_contract(new_implementation))
    if result is None:
        return
    tx_hash, pending = result
    echo_tx("upgradeToAndCall", tx_hash)
    if pending:
        click.echo(f"Pending implementation: {pending}")


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@contract_type_option
@click.option("--nonce", default=None, type=int, help="Nonce of the transaction to replace.")
@click.option("--tx-hash", default=None, type=str, help="Look the nonce up from a pending transaction hash.")
@log_file_option
def cancel_transaction(contract_type, nonce, tx_hash, log_file):
    """Replaces a pending transaction with a zero-value self-transfer at a higher gas price."""
    if nonce is None and tx_hash is None:
        raise click.UsageError("Either --nonce or --tx-hash is required")

    async def _cancel(ctx):
        target_nonce = nonce
        if target_nonce is None:
            details = await ctx.dispatcher.get_transaction_details(tx_hash)
            if details.status == "Confirmed":
                raise click.ClickException(f"Transaction {tx_hash} is already confirmed")
            target_nonce = details.nonce
        return await ctx.dispatcher.cancel_transaction(target_nonce)

    echo_tx("Cancellation", run_with_context(contract_type, log_file, _cancel))


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@contract_type_option
@click.argument("tx_hash")
@log_file_option
def transaction_details(contract_type, tx_hash, log_file):
    details = run_with_context(contract_type, log_file, lambda ctx: ctx.dispatcher.get_transaction_details(tx_hash))
    echo_json(details.model_dump(mode="json"))
