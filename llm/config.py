import os
from pathlib import Path
from dotenv import load_dotenv

current_file_path = Path(__file__).resolve()
root_dir = current_file_path.parent.parent
env_path = root_dir / ".env.dev"

if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=True)
else:
    load_dotenv()

PLACEHOLDER_API_KEY = "your-groq-api-key-here"


class LLMConfig:
    def __init__(self) -> None:
        self.GROQ_API_KEY = os.getenv("GROQ_API_KEY")
        self.LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1")
        # https://console.groq.com/docs/models
        self.LLM_MODEL = os.getenv("LLM_MODEL", "llama-3.3-70b-versatile")
        self.LLM_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "10"))
        self.LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "500"))
        self.LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.9"))

config = LLMConfig()
