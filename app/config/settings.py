from pydantic_settings import BaseSettings
from dotenv import load_dotenv, find_dotenv
from os import getenv

_env_path = find_dotenv(usecwd=True)  # locate a .env file in this folder or parent folders
if _env_path:
    load_dotenv(_env_path)


class Settings(BaseSettings):
    # Backing data
    TOPICS_FILE: str = getenv('TOPICS_FILE', 'data/topics.json')
    # 0 disables snapshot caching: the file is re-read on every result cache miss
    TOPICS_SNAPSHOT_TTL_SECONDS: int = int(getenv('TOPICS_SNAPSHOT_TTL_SECONDS', '0'))

    # Result cache
    CACHE_TTL_SECONDS: int = int(getenv('CACHE_TTL_SECONDS', '300'))

    # Pagination bounds
    DEFAULT_PAGE_LIMIT: int = int(getenv('DEFAULT_PAGE_LIMIT', '10'))
    MAX_PAGE_LIMIT: int = int(getenv('MAX_PAGE_LIMIT', '50'))

    LOG_LEVEL: str = getenv('LOG_LEVEL', 'INFO')

settings = Settings()
