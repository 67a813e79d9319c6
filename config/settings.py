"""Runtime configuration for the documentation service.

Settings are plain pydantic models populated from environment variables so the
server, the uplink listener and the client store can be configured without code
changes.
"""

import os
from typing import List, Optional
from pydantic import BaseModel, Field


DEFAULT_ORIGINS = "http://localhost:3002,https://platform.stefankruik.com"


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class ServerSettings(BaseModel):
    """Documentation server configuration."""
    docs_root: str = Field(default="documentation", description="Root directory of the documentation tree")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3001, description="HTTP port")
    allowed_origins: List[str] = Field(default_factory=lambda: _split_csv(DEFAULT_ORIGINS), description="CORS origins")
    redirect_url: str = Field(
        default="https://platform.stefankruik.com/documentation",
        description="Target of the base route redirect",
    )

    # Deployment
    deployment_key: Optional[str] = Field(default=None, description="Bearer key for the /deploy route")
    deploy_script: str = Field(default="deploy.sh", description="Script executed on a deploy task")

    # Uplink (message queue)
    uplink_url: Optional[str] = Field(default=None, description="AMQP URL, listener disabled when unset")
    uplink_exchange: str = Field(default="platform", description="Direct exchange to bind to")
    uplink_routing_key: str = Field(default="server", description="Routing key for this service")

    # Rate limiting
    refresh_rate_limit: str = Field(default="10 per 2 minutes", description="Limit applied to /refresh")
    rate_limit_storage_url: Optional[str] = Field(default=None, description="Redis URL for limiter storage")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_file: Optional[str] = Field(default=None, description="Optional JSON log file")
    log_json: bool = Field(default=False, description="Emit JSON logs on the console")

    @classmethod
    def from_env(cls) -> 'ServerSettings':
        """Create configuration from environment variables."""
        return cls(
            docs_root=os.getenv('DOCS_ROOT', 'documentation'),
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', '3001')),
            allowed_origins=_split_csv(os.getenv('ALLOWED_ORIGINS', DEFAULT_ORIGINS)),
            redirect_url=os.getenv('DOCS_REDIRECT_URL', 'https://platform.stefankruik.com/documentation'),
            deployment_key=os.getenv('DEPLOYMENT_KEY') or None,
            deploy_script=os.getenv('DEPLOY_SCRIPT', 'deploy.sh'),
            uplink_url=os.getenv('UPLINK_URL') or None,
            uplink_exchange=os.getenv('UPLINK_EXCHANGE', 'platform'),
            uplink_routing_key=os.getenv('UPLINK_ROUTING_KEY', 'server'),
            refresh_rate_limit=os.getenv('REFRESH_RATE_LIMIT', '10 per 2 minutes'),
            rate_limit_storage_url=os.getenv('RATE_LIMIT_STORAGE_URL') or None,
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
            log_file=os.getenv('LOG_FILE') or None,
            log_json=_env_flag('LOG_JSON'),
        )


class ClientSettings(BaseModel):
    """Documentation client (store) configuration."""
    api_base: str = Field(default="http://localhost:3001", description="Base URL of the documentation API")
    storage_path: str = Field(default=".docs_store.json", description="File backing the persistent store slots")
    timeout: float = Field(default=10.0, description="HTTP timeout in seconds")

    @classmethod
    def from_env(cls) -> 'ClientSettings':
        """Create configuration from environment variables."""
        return cls(
            api_base=os.getenv('DOCS_API_BASE', 'http://localhost:3001'),
            storage_path=os.getenv('DOCS_STORAGE_PATH', '.docs_store.json'),
            timeout=float(os.getenv('DOCS_API_TIMEOUT', '10')),
        )
