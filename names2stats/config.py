from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from names2stats.exceptions import ConfigMissingError
from names2stats.protocols import DEFAULT_BUFFER_SIZE

ROOT_DIR_ENV = "ENV_ROOT_DIR_NAME"


class Settings(BaseSettings):
    """
    Runtime configuration, read from the environment.
    """

    # Sandbox root, unprefixed for compatibility with existing deployments
    root_dir_name: str | None = Field(default=None, validation_alias=ROOT_DIR_ENV)

    follow_symlinks: bool = True
    local_time: bool = False
    log_level: str = "INFO"
    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="NAMES2STATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def require_root_dir(self) -> str:
        """Return the configured root directory.

        Raises:
            ConfigMissingError: If no root directory is configured.
        """
        if not self.root_dir_name:
            raise ConfigMissingError(ROOT_DIR_ENV)
        return self.root_dir_name
