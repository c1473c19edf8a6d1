from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load .env file into os.environ BEFORE pydantic reads it
load_dotenv()


class Settings(BaseSettings):
    # Clarifying questions
    # When disabled, generation prompts carry no clarifying-question guidance
    CLARIFYING_QUESTIONS_ENABLED: bool = True
    MAX_CLARIFYING_QUESTIONS: int = 3  # Guidance asks the LLM for 1-3 questions

    # Identity prefixes (e.g. "cq_3f2a...", "q_9b1c...")
    QUESTION_SET_ID_PREFIX: str = "cq"
    QUESTION_ID_PREFIX: str = "q"

    # Logging
    LOG_LEVEL: str = "INFO"

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",  # ignore unknown env vars instead of raising errors
    )


settings = Settings()
