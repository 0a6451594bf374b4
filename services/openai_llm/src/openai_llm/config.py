"""OpenAI LLM service configuration."""
from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from shared.config import BaseAppSettings


class OpenAISettings(BaseAppSettings):
    model_config = SettingsConfigDict(env_prefix="OPENAI_")

    host: str = "0.0.0.0"
    port: int = 8002
    mock: bool = True
    generate_timeout_seconds: float = 120.0

    api_key: SecretStr | None = None
    base_url: str = "https://api.openai.com/v1"
    organization: str | None = None
    request_timeout_seconds: float = 60.0

    # Completion parameters, forwarded to the API unchanged
    model: str = "text-davinci-003"
    max_tokens: int = 256
    temperature: float = 1.0
    top_p: float = 1.0
    n: int = 1
    presence_penalty: float = 0.0
    frequency_penalty: float = 0.0
    best_of: int = 1
    logit_bias: dict[str, float] | None = None
