import os


class Settings:
    # API Settings
    PROJECT_NAME: str = "ParamConverter Demo API"
    VERSION: str = "1.0.0"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8005))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Param converter Settings
    # Bytes of an uploaded multipart file kept in memory before spilling to a temp file
    MULTIPART_MAX_MEMORY: int = int(os.getenv("PARAMCONVERTER_MULTIPART_MAX_MEMORY", 0))
    # Attribute of request.state the bound facade is stored under
    FACADE_STATE_KEY: str = os.getenv("PARAMCONVERTER_FACADE_STATE_KEY", "paramconverter_facade")

    # Logging Settings
    LOG_LEVEL: str = os.getenv("PARAMCONVERTER_LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = os.getenv("PARAMCONVERTER_LOG_FILE", "")


settings = Settings()
