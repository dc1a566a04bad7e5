import asyncio
import json
from typing import Any, Awaitable, Callable, Optional

import click

from config.settings import settings
from governance.enums.contract_type import ContractType
from governance.service.governance_factory import GovernanceContext
from utils.exceptions import GovernanceError
from utils.logger_utils import configure_logging, get_logger

logger = get_logger("Governance CLI")

CONTRACT_TYPE_CHOICE = click.Choice([contract_type.value for contract_type in ContractType])


def contract_type_option(func):
    return click.option(
        "-c",
        "--contract-type",
        default=settings.governance.active_contract,
        show_default=True,
        type=CONTRACT_TYPE_CHOICE,
        help="Governance target to operate on.",
    )(func)


def log_file_option(func):
    return click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")(func)


def run_with_context(
    contract_type: str,
    log_file: Optional[str],
    action: Callable[[GovernanceContext], Awaitable[Any]],
) -> Any:
    """
    Configures logging, runs `action` against a fresh GovernanceContext and closes it.
    Typed governance failures become a one-line CLI error; anything else is logged with its traceback.
    """
    configure_logging(log_file, settings.app.log_level)

    async def _run() -> Any:
        context = GovernanceContext(settings, contract_type)
        try:
            return await action(context)
        finally:
            await context.close()

    try:
        return asyncio.run(_run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
    except click.ClickException:
        raise
    except GovernanceError as e:
        logger.error(f"{type(e).__name__}: {e}")
        raise click.ClickException(str(e)) from e
    except Exception as e:
        logger.exception("An error occurred:")
        raise e


def echo_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2, default=str))


def echo_tx(label: str, tx_hash: str) -> None:
    click.echo(f"{label} submitted: {tx_hash}")
