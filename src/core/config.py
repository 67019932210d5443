"""
Runtime settings, read from CHAT_* environment variables and a local .env file.
"""
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain import Mode
from core.errors import ConfigError

DEFAULT_LOG_FILE = Path.home() / '.chatbot-console' / 'console.log'


class Settings(BaseSettings):
    respondent: Literal['mock', 'langgraph'] = 'mock'
    mode: Mode = 'default'
    # 0 disables the timeout
    timeout: Optional[float] = Field(30.0, ge=0)
    mock_delay: float = Field(0.9, ge=0)
    model: str = 'gpt-4o'
    fast_model: str = 'gpt-4o-mini'
    log_level: str = 'INFO'
    log_file: Path = DEFAULT_LOG_FILE

    model_config = SettingsConfigDict(
        env_prefix='CHAT_',
        env_file='.env',
        extra='ignore',
        frozen=True,
    )

    @field_validator('respondent', 'mode', mode='before')
    @classmethod
    def _lower(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator('log_level', mode='before')
    @classmethod
    def _upper(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator('timeout')
    @classmethod
    def _zero_disables(cls, value: Optional[float]) -> Optional[float]:
        return value or None

    @field_validator('log_file')
    @classmethod
    def _expand(cls, value: Path) -> Path:
        return value.expanduser()

    def model_for(self, mode: Mode) -> tuple[str, float]:
        """Map a mode tag to the (model, temperature) the langgraph agent uses."""
        if mode == 'fast':
            return self.fast_model, 0.7
        if mode == 'precise':
            return self.model, 0.0
        return self.model, 0.3


def load_settings(env_file: Optional[str] = '.env') -> Settings:
    """
    Build Settings from the environment.

    Args:
        env_file: dotenv file to read as well; None reads the environment only
    """
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigError(f'invalid CHAT_* settings:\n{e}') from e
