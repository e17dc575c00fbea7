from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    chain: str = "gnosis"
    rpc_url: str = "https://rpc.gnosischain.com"
    supabase_url: str = ""
    supabase_key: str = ""
    market_metadata_path: str = ""
    default_strategy: str = "algebra"
    http_rate_per_second: float = 5.0
    http_timeout_seconds: float = 30.0
    token_cache_ttl_seconds: int = 3600
    split_timeout_seconds: float = 60.0  # hard ceiling for a hung collateral split
    settling_delay_seconds: float = 2.0  # wait for the ledger read-path after a write
    reanalysis_delay_seconds: float = 2.0
    debug: bool = True

    class Config:
        env_file = ".env"
        env_prefix = "FUTARCHY_"


settings = Settings()
