from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Web server
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Upstream symbol list (GET, returns {"success": bool, "symbols": [...]})
    symbols_url: str = ""
    fetch_timeout_s: float = 10.0

    # Symbols this deployment expects to stream; reported by /api/health
    watched_symbols: list[str] = [
        "VANTAGE:XAUUSD",
        "VANTAGE:GER40",
        "VANTAGE:NAS100",
        "VANTAGE:BTCUSD",
        "VANTAGE:XRPUSD",
        "BINANCE:SUIUSDT",
    ]

    # Logging
    log_path: str = "data/levelwatch.log"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def api_base(self) -> str:
        return f"http://{self.api_host}:{self.api_port}"


settings = Settings()
