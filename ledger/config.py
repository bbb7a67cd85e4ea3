# ledger/config.py
import os

DEFAULTS = {
    "DATABASE": os.path.join(os.getcwd(), "finance.db"),
    "API_PREFIX": "",
    "HOST": "0.0.0.0",
    "PORT": 8080,
    "LOG_LEVEL": "INFO",
}

# config key -> environment variable
ENV_VARS = {
    "DATABASE": "LEDGER_DB_PATH",
    "API_PREFIX": "LEDGER_API_PREFIX",
    "HOST": "LEDGER_HOST",
    "PORT": "LEDGER_PORT",
    "LOG_LEVEL": "LEDGER_LOG_LEVEL",
}


def load_config(overrides=None):
    """Defaults, then environment variables, then explicit overrides."""
    config = dict(DEFAULTS)
    for key, env_var in ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is not None:
            config[key] = value
    if overrides:
        config.update(overrides)

    # every request opens its own connection, so the database must be a file
    if str(config["DATABASE"]).strip() in ("", ":memory:"):
        raise ValueError("DATABASE must be a file path, not an in-memory database")

    config["PORT"] = int(config["PORT"])
    config["API_PREFIX"] = config["API_PREFIX"].rstrip("/")
    config["LOG_LEVEL"] = str(config["LOG_LEVEL"]).upper()
    return config
