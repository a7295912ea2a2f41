"""Default runtime settings, overridable with FIREPLAN_* environment variables."""


class Settings:
    # values read from the environment are parsed as JSON, so lists work:
    # FIREPLAN_CORS_ORIGINS='["https://plan.example"]'
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    STATE_PATH = "user_data/fireplan_state.json"
    STATE_WRITE_ATTEMPTS = 3
    SHARE_BASE_URL = "http://localhost:5173/"
    LOG_LEVEL = "INFO"
