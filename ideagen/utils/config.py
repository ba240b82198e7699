import os
from pathlib import Path
from dotenv import load_dotenv

class Config:
    def __init__(self):
        # Load appropriate .env file based on environment
        self.env = os.getenv("IDEAGEN_ENV", "dev")
        self._load_env_file()

        # Credential store
        self.api_keys_file = Path(os.getenv("API_KEYS_FILE", "api_keys.yaml"))

        # Provider credential environment variables, used when no key is stored
        self.api_key_env_vars = {
            "openai": "OPENAI_API_KEY",
            "gemini": "GEMINI_API_KEY",
            "anthropic": "ANTHROPIC_API_KEY",
            "perplexity": "PERPLEXITY_API_KEY",
            "deepseek": "DEEPSEEK_API_KEY",
            "grok": "GROK_API_KEY",
        }

        # HTTP settings
        self.request_timeout = float(os.getenv("REQUEST_TIMEOUT", 60))

        # Rate limit settings
        self.rate_limit_max_calls = int(os.getenv("RATE_LIMIT_MAX_CALLS", 10))
        self.rate_limit_window_seconds = float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", 60))

        # Logging settings
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.log_format = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        self.http_log_level = os.getenv("HTTP_LOG_LEVEL", "WARNING").upper()

    def _load_env_file(self):
        """Load the appropriate .env file based on the environment."""
        env_file = ".env"

        # Check for environment-specific .env file
        if self.env != "dev":
            env_specific_file = f".env.{self.env}"
            if Path(env_specific_file).exists():
                env_file = env_specific_file
                print(f"Loading environment from {env_file}")
            else:
                print(f"Warning: {env_specific_file} not found, falling back to .env")

        # Load the environment file
        load_dotenv(env_file)

# Create a global config instance
config = Config()
