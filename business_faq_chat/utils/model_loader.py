import os
from typing import Optional

from dotenv import load_dotenv
from langchain_google_genai import ChatGoogleGenerativeAI

from business_faq_chat.logger import GLOBAL_LOGGER as log
from business_faq_chat.utils.config_loader import load_config


class ApiKeyManager:
    """
    Server-side fallback credential. Sessions normally bring their own key;
    when one does not, the key from the environment is used instead.
    """

    ENV_KEYS = ["GOOGLE_API_KEY", "GEMINI_API_KEY"]

    def __init__(self):
        load_dotenv()
        self.default_key: Optional[str] = None

        for k in self.ENV_KEYS:
            if val := os.getenv(k):
                self.default_key = val
                log.info("Loaded fallback credential from env | var=%s", k)
                break
        else:
            log.info("No fallback credential in env; sessions must supply their own")

    def resolve(self, credential: Optional[str]) -> str:
        return credential or self.default_key or ""


class ModelLoader:
    """
    Responsible for:
    - Loading the YAML config
    - Building the Gemini chat model for a role ("chat" or "analysis")
      bound to a given credential
    """

    def __init__(self, config: Optional[dict] = None):
        self.api_key_mgr = ApiKeyManager()

        # Load configuration
        self.config = config if config is not None else load_config()
        log.info("YAML config loaded | config_keys=%s", list(self.config.keys()))

    def load_llm(self, role: str, credential: Optional[str]):
        """
        Load and return the configured LLM model.
        Args:
            role: One of "chat" or "analysis"
            credential: the session's API key (falls back to env)

        Returns:
            Configured LLM instance
        """
        if role not in self.config.get("llm", {}):
            log.error("LLM role not found in config | role=%s", role)
            raise ValueError(f"LLM role '{role}' not found in config")

        llm_config = self.config["llm"][role]

        provider = llm_config.get("provider", "google")
        model = llm_config["model_name"]
        temp = llm_config.get("temperature")
        max_t = llm_config.get("max_output_tokens")

        log.info("Loading LLM | role=%s | model=%s", role, model)

        if provider == "google":
            return ChatGoogleGenerativeAI(
                model=model,
                google_api_key=self.api_key_mgr.resolve(credential),
                temperature=temp,
                max_output_tokens=max_t,
            )

        raise ValueError(f"Unsupported provider {provider}")
