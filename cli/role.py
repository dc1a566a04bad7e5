import click

from cli.governance_cli_utils import contract_type_option, echo_json, echo_tx, log_file_option, run_with_context
from constants.governance_constants import KNOWN_ROLE_NAMES, DEFAULT_ADMIN_ROLE
from utils.formatter_utils import format_token_amount

ROLE_CHOICE = click.Choice([*KNOWN_ROLE_NAMES, DEFAULT_ADMIN_ROLE])


@click.group()
def role():
    """Role configuration: transaction limits, quorums and membership checks."""


@role.command("set_limit")
@contract_type_option
@click.argument("role_name", type=ROLE_CHOICE)
@click.argument("limit", type=str)
@log_file_option
def set_limit(contract_type, role_name, limit, log_file):
    """Sets the per-transaction limit of ROLE_NAME to LIMIT whole tokens."""
    tx_hash = run_with_context(
        contract_type, log_file, lambda ctx: ctx.dispatcher.set_transaction_limit(role_name, limit)
    )
    echo_tx("setRoleTransactionLimit", tx_hash)


@role.command("set_quorum")
@contract_type_option
@click.argument("role_name", type=ROLE_CHOICE)
@click.argument("quorum", type=str)
@log_file_option
def set_quorum(contract_type, role_name, quorum, log_file):
    tx_hash = run_with_context(contract_type, log_file, lambda ctx: ctx.dispatcher.set_role_quorum(role_name, quorum))
    echo_tx("setRoleQuorum", tx_hash)


@role.command("has_role")
@contract_type_option
@click.argument("address")
@click.argument("role_name", type=ROLE_CHOICE)
@log_file_option
def has_role(contract_type, address, role_name, log_file):
    result = run_with_context(contract_type, log_file, lambda ctx: ctx.dispatcher.check_has_role(address, role_name))
    click.echo(f"{address} {'has' if result else 'does not have'} {role_name}")


@role.command("config")
@contract_type_option
@click.argument("role_name", type=ROLE_CHOICE)
@log_file_option
def config(contract_type, role_name, log_file):
    role_config = run_with_context(contract_type, log_file, lambda ctx: ctx.dispatcher.check_role_config(role_name))
    payload = role_config.model_dump(mode="json")
    payload["transaction_limit_tokens"] = format_token_amount(role_config.transaction_limit)
    echo_json(payload)
