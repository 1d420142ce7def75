"""
config.py - Configuration for the nested table engine
"""
import os
from typing import Optional
from dataclasses import dataclass

DEFAULT_API_URL = "https://jsonplaceholder.typicode.com/posts"
DEFAULT_MAX_DEPTH = 5


@dataclass
class NestedTableConfig:
    """Configuration for the nested table engine"""

    # Record source configuration
    source_type: str = "http"  # http or ibis
    api_url: str = DEFAULT_API_URL
    scope_param: str = "parentId"
    request_timeout: float = 10.0
    backend_uri: str = ":memory:"
    table_name: str = "records"

    # Tree configuration
    max_depth: int = DEFAULT_MAX_DEPTH
    enable_child_cache: bool = False
    child_cache_ttl: int = 300

    # Service configuration
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def from_env(self) -> 'NestedTableConfig':
        """Load configuration from environment variables"""
        config = NestedTableConfig()

        # Source settings
        config.source_type = os.getenv('NESTED_TABLE_SOURCE', config.source_type)
        config.api_url = os.getenv('NESTED_TABLE_API_URL', config.api_url)
        config.scope_param = os.getenv('NESTED_TABLE_SCOPE_PARAM', config.scope_param)
        config.request_timeout = float(os.getenv('NESTED_TABLE_REQUEST_TIMEOUT', str(config.request_timeout)))
        config.backend_uri = os.getenv('NESTED_TABLE_BACKEND_URI', config.backend_uri)
        config.table_name = os.getenv('NESTED_TABLE_TABLE', config.table_name)

        # Tree settings
        config.max_depth = int(os.getenv('NESTED_TABLE_MAX_DEPTH', str(config.max_depth)))
        config.enable_child_cache = os.getenv('NESTED_TABLE_CHILD_CACHE', 'false').lower() in ('1', 'true', 'yes')
        config.child_cache_ttl = int(os.getenv('NESTED_TABLE_CHILD_CACHE_TTL', str(config.child_cache_ttl)))

        # Service settings
        config.log_level = os.getenv('NESTED_TABLE_LOG_LEVEL', config.log_level)
        config.host = os.getenv('NESTED_TABLE_HOST', config.host)
        config.port = int(os.getenv('NESTED_TABLE_PORT', str(config.port)))

        return config

    def validate(self) -> None:
        """Validate configuration settings"""
        errors = []

        if self.source_type not in ("http", "ibis"):
            errors.append(f"source_type must be 'http' or 'ibis', got {self.source_type!r}")

        if self.source_type == "http" and not self.api_url:
            errors.append("api_url is required for the http source")

        if self.request_timeout <= 0:
            errors.append("request_timeout must be positive")

        if self.max_depth <= 0:
            errors.append("max_depth must be positive")

        if self.child_cache_ttl <= 0:
            errors.append("child_cache_ttl must be positive")

        if not 0 < self.port < 65536:
            errors.append("port must be between 1 and 65535")

        if errors:
            raise ValueError(f"Configuration validation errors: {'; '.join(errors)}")


class ConfigManager:
    """Manager for configuration loading and validation"""

    def __init__(self):
        self.config: Optional[NestedTableConfig] = None

    def load_config(self, config_source: Optional[str] = None) -> NestedTableConfig:
        """Load configuration from various sources"""
        if config_source == 'env':
            self.config = NestedTableConfig().from_env()
        else:
            self.config = NestedTableConfig()

        self.config.validate()
        return self.config

    def get_config(self) -> NestedTableConfig:
        """Get the loaded configuration"""
        if self.config is None:
            self.config = self.load_config()
        return self.config


# Global configuration manager
config_manager = ConfigManager()


def get_config() -> NestedTableConfig:
    """Get the global configuration"""
    return config_manager.get_config()
