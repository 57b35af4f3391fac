from pathlib import Path
import os
import yaml

# Environment variables that win over config.yaml: (env var, section, key)
ENV_OVERRIDES = [
    ("STORAGE_BACKEND", "storage", "backend"),
    ("CHAT_MODEL", "llm.chat", "model_name"),
    ("ANALYSIS_MODEL", "llm.analysis", "model_name"),
]


def _project_root() -> Path:
    # utils -> business_faq_chat -> project root
    return Path(__file__).resolve().parents[2]


def _apply_env_overrides(config: dict) -> dict:
    for env_var, section, key in ENV_OVERRIDES:
        value = os.getenv(env_var)
        if not value:
            continue
        node = config
        for part in section.split("."):
            node = node.setdefault(part, {})
        node[key] = value
    return config


def load_config(config_path: str | None = None) -> dict:
    """
    Load config.yaml (or CONFIG_PATH / an explicit path) and apply
    environment overrides on top of it.
    """
    if config_path is None:
        config_path = os.getenv("CONFIG_PATH") or str(
            _project_root() / "business_faq_chat" / "config" / "config.yaml"
        )

    path = Path(config_path)
    if not path.is_absolute():
        path = _project_root() / path
    if not path.exists():
        raise FileNotFoundError(f"Config file not found at {path}")

    with open(path, "r", encoding="utf-8") as file:
        config = yaml.safe_load(file) or {}
    return _apply_env_overrides(config)
