import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from hexbytes import HexBytes
from web3.exceptions import TransactionNotFound

from abi.governance_abi import QUORUM_UPDATED_EVENT
from governance.access.web3_access_port import Web3AccessPort
from utils.exceptions import NotConnectedError, RateLimitError, RpcUnavailableError

CONTRACT = "0x2222222222222222222222222222222222222222"
SENDER = "0x1111111111111111111111111111111111111111"
ROLE = HexBytes("0x" + "aa" * 32)


@pytest.fixture
def mock_web3():
    web3 = MagicMock()
    web3.eth = MagicMock()
    web3.eth.get_transaction = AsyncMock()
    web3.eth.send_transaction = AsyncMock(return_value=HexBytes("0x" + "12" * 32))
    web3.eth.get_code = AsyncMock(return_value=HexBytes("0x6080"))
    return web3


@pytest.fixture
def access_port(mock_web3):
    return Web3AccessPort(mock_web3, chain_id=1, default_account=SENDER)


@pytest.fixture(autouse=True)
def no_retry_delay():
    with patch("utils.async_utils.asyncio.sleep", new_callable=AsyncMock):
        yield


def _contract_function(mock_web3, call_result=None, call_side_effect=None):
    function = MagicMock()
    function.call = AsyncMock(return_value=call_result, side_effect=call_side_effect)
    function.build_transaction = AsyncMock(return_value={"to": CONTRACT, "data": "0x", "gas": 50000})
    contract = MagicMock()
    contract.functions.__getitem__.return_value = MagicMock(return_value=function)
    mock_web3.eth.contract.return_value = contract
    return function


@pytest.mark.asyncio
async def test_read_contract(mock_web3, access_port):
    function = _contract_function(mock_web3, call_result=(10, 2))

    assert await access_port.read_contract(CONTRACT, "roleConfigs", ["0x00"], []) == (10, 2)
    function.call.assert_awaited_once()


@pytest.mark.asyncio
async def test_transport_failure_becomes_rpc_unavailable(mock_web3, access_port):
    function = _contract_function(mock_web3, call_side_effect=ConnectionError("refused"))

    with pytest.raises(RpcUnavailableError):
        await access_port.read_contract(CONTRACT, "proposalCount", [], [])
    assert function.call.await_count == 3


@pytest.mark.asyncio
async def test_simulate_calls_then_builds(mock_web3, access_port):
    function = _contract_function(mock_web3)

    prepared = await access_port.simulate_contract(CONTRACT, "approveProposal", ["0x01"], [])

    assert prepared["gas"] == 50000
    function.call.assert_awaited_once_with({"from": SENDER, "value": 0})
    function.build_transaction.assert_awaited_once()


@pytest.mark.asyncio
async def test_simulate_without_account_fails(mock_web3):
    port = Web3AccessPort(mock_web3, chain_id=1)
    with pytest.raises(NotConnectedError):
        await port.simulate_contract(CONTRACT, "approveProposal", ["0x01"], [])


@pytest.mark.asyncio
async def test_get_logs_maps_events(mock_web3, access_port):
    event = MagicMock()
    event.get_logs = AsyncMock(
        return_value=[
            {
                "event": "QuorumUpdated",
                "args": {"role": ROLE, "quorum": 3},
                "address": CONTRACT,
                "blockNumber": 12,
                "logIndex": 1,
                "transactionHash": HexBytes("0x" + "34" * 32),
            }
        ]
    )
    contract = MagicMock()
    contract.events.__getitem__.return_value = MagicMock(return_value=event)
    mock_web3.eth.contract.return_value = contract

    logs = await access_port.get_logs(CONTRACT, QUORUM_UPDATED_EVENT, 0, 20)

    assert logs[0].args == {"role": "0x" + "aa" * 32, "quorum": 3}
    assert logs[0].chain_position == (12, 1)
    event.get_logs.assert_awaited_once_with(from_block=0, to_block=20)


@pytest.mark.asyncio
async def test_get_logs_block_range_rejection(mock_web3, access_port):
    event = MagicMock()
    event.get_logs = AsyncMock(side_effect=ValueError({"code": -32600, "message": "block range too large"}))
    contract = MagicMock()
    contract.events.__getitem__.return_value = MagicMock(return_value=event)
    mock_web3.eth.contract.return_value = contract

    with pytest.raises(RateLimitError):
        await access_port.get_logs(CONTRACT, QUORUM_UPDATED_EVENT, 0, 100000)


@pytest.mark.asyncio
async def test_send_without_key_uses_node_account(mock_web3, access_port):
    tx_hash = await access_port.send_transaction({"to": CONTRACT, "data": "0x"})

    assert tx_hash == "0x" + "12" * 32
    sent = mock_web3.eth.send_transaction.await_args.args[0]
    assert sent["from"] == SENDER
    assert sent["chainId"] == 1


@pytest.mark.asyncio
async def test_missing_transaction_is_none(mock_web3, access_port):
    mock_web3.eth.get_transaction.side_effect = TransactionNotFound("not found")
    assert await access_port.get_transaction("0x" + "56" * 32) is None


@pytest.mark.asyncio
async def test_get_bytecode(mock_web3, access_port):
    assert await access_port.get_bytecode(CONTRACT) == b"\x60\x80"
