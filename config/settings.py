from typing import Dict, List, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_CONFIG = SettingsConfigDict(
    env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
)


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = _ENV_CONFIG

    name: str = Field("Governance Admin Dashboard", validation_alias="APP_NAME")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")


class ChainSettings(BaseSettings):
    """Node connection and signing identity."""

    model_config = _ENV_CONFIG

    rpc_provider_uris: str = Field(
        default="http://127.0.0.1:8545",
        validation_alias="RPC_PROVIDER_URIS",
        description="Comma-separated JSON-RPC URLs, tried in failover order",
    )
    chain_id: int = Field(default=1, gt=0, validation_alias="CHAIN_ID")
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")
    # Absent key means no connected signer: every write fails fast with NotConnectedError
    signer_private_key: Optional[SecretStr] = Field(default=None, validation_alias="SIGNER_PRIVATE_KEY")
    token_symbol: str = Field(default="FULA", validation_alias="TOKEN_SYMBOL")

    @property
    def provider_uri_list(self) -> List[str]:
        return [uri.strip() for uri in self.rpc_provider_uris.split(",") if uri.strip()]


class LogFetcherSettings(BaseSettings):
    """eth_getLogs chunking. The strictest known provider tier allows 10-block ranges."""

    model_config = _ENV_CONFIG

    chunk_size: int = Field(default=9, gt=0, validation_alias="LOG_CHUNK_SIZE")
    chunk_delay_seconds: float = Field(default=0.15, ge=0, validation_alias="LOG_CHUNK_DELAY_SECONDS")
    from_block: int = Field(default=0, ge=0, validation_alias="LOG_FROM_BLOCK")


class GovernanceSettings(BaseSettings):
    """Active governance target and per-target contract addresses."""

    model_config = _ENV_CONFIG

    active_contract: str = Field(default="token", validation_alias="ACTIVE_CONTRACT")
    token_address: Optional[str] = Field(default=None, validation_alias="TOKEN_ADDRESS")
    vesting_address: Optional[str] = Field(default=None, validation_alias="VESTING_ADDRESS")
    airdrop_address: Optional[str] = Field(default=None, validation_alias="AIRDROP_ADDRESS")
    testnet_mining_address: Optional[str] = Field(default=None, validation_alias="TESTNET_MINING_ADDRESS")
    storage_pool_address: Optional[str] = Field(default=None, validation_alias="STORAGE_POOL_ADDRESS")
    reward_engine_address: Optional[str] = Field(default=None, validation_alias="REWARD_ENGINE_ADDRESS")
    staking_address: Optional[str] = Field(default=None, validation_alias="STAKING_ADDRESS")

    default_quorum_fallback: int = Field(default=2, ge=1, validation_alias="DEFAULT_QUORUM_FALLBACK")
    cancel_gas_price_bump_percent: int = Field(default=10, ge=0, validation_alias="CANCEL_GAS_PRICE_BUMP_PERCENT")

    def address_map(self) -> Dict[str, Optional[str]]:
        return {
            "token": self.token_address,
            "vesting": self.vesting_address,
            "airdrop": self.airdrop_address,
            "testnet_mining": self.testnet_mining_address,
            "storage_pool": self.storage_pool_address,
            "reward_engine": self.reward_engine_address,
            "staking": self.staking_address,
        }


class Settings(BaseSettings):
    """
    Composes all sub-settings. Each section reads its own flat env vars.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app: AppSettings = Field(default_factory=AppSettings)
    chain: ChainSettings = Field(default_factory=ChainSettings)
    log_fetcher: LogFetcherSettings = Field(default_factory=LogFetcherSettings)
    governance: GovernanceSettings = Field(default_factory=GovernanceSettings)


# Singleton instance
settings = Settings()
