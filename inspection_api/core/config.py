from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    app_name: str = "Inspection API"
    VIN_DECODE_URL: str = "https://vpic.nhtsa.dot.gov/api/vehicles/decodevin"
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DBNAME: str = "inspectionapp"
    IDENTITY_BASE_URL: str = "https://identitytoolkit.googleapis.com/v1"
    IDENTITY_API_KEY: str = ""
    PUBLIC_BASE_URL: str = "http://localhost:8000"
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"
    LIVE_UPDATE_LIMIT: int = 10
    TABLE_PREVIEW_LIMIT: int = 50

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
