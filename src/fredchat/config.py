"""Widget configuration.

Hides where settings come from. Everything the widget needs is carried by a
single ChatConfig injected at construction; only the CLI reads the
environment.
"""

import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_GREETING = "Hi, I'm Fred! How can I help you today?"
DEFAULT_SYSTEM_PROMPT = "You are personable chatbot."

ENV_PREFIX = "FREDCHAT_"


class ChatConfig(BaseModel):
    """Settings for one chat widget instance."""

    model_config = ConfigDict(frozen=True)

    auth_token: str = Field(
        default="",
        description="Static secret used to authenticate to the key backend"
    )
    key_endpoint: str = Field(
        default="http://localhost:3000/api/getApiKey",
        description="Trusted backend URL that returns {'apiKey': ...}"
    )
    base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Completion API base URL ('/chat/completions' is appended)"
    )
    model: str = Field(default="gpt-4", description="Completion model name")
    system_prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT)
    greeting: str = Field(
        default=DEFAULT_GREETING,
        description="Bot message shown on start; empty disables it"
    )
    user_label: str = Field(default="You")
    bot_label: str = Field(default="Fred")
    trust_model_output: bool = Field(
        default=True,
        description="Inject model replies into HTML without escaping"
    )
    overlap_policy: Literal["reject", "queue"] = Field(
        default="reject",
        description="What to do with a send started while another is in flight"
    )
    input_min_rows: int = Field(default=1, ge=1)
    input_max_rows: int = Field(default=8, ge=1)

    @classmethod
    def from_env(cls) -> "ChatConfig":
        """Build a config from FREDCHAT_* environment variables.

        Environment variables:
            FREDCHAT_AUTH_TOKEN: Secret for the key backend
            FREDCHAT_KEY_ENDPOINT: Key backend URL
            FREDCHAT_BASE_URL: Completion API base URL
            FREDCHAT_MODEL: Model name (default: gpt-4)
            FREDCHAT_SYSTEM_PROMPT: System instruction
            FREDCHAT_GREETING: Greeting message
            FREDCHAT_TRUST_MODEL_OUTPUT: "true"/"false"
            FREDCHAT_OVERLAP_POLICY: "reject" or "queue"
        """
        values: dict[str, object] = {}
        for name in (
            "auth_token",
            "key_endpoint",
            "base_url",
            "model",
            "system_prompt",
            "greeting",
            "user_label",
            "bot_label",
            "overlap_policy",
        ):
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw

        trust = os.getenv(ENV_PREFIX + "TRUST_MODEL_OUTPUT")
        if trust is not None:
            values["trust_model_output"] = trust.strip().lower() in ("1", "true", "yes", "on")

        return cls(**values)
