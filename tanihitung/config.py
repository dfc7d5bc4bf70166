from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "TaniHitung"
    DATABASE_URL: str = "sqlite:///./tanihitung.db"

    # Auth
    JWT_SECRET: str = ""  # REQUIRED when issuing tokens — fail loudly if missing
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_EXPIRE_MINUTES: int = 60

    # Seed the five built-in calculators into the catalog on startup
    SEED_DEFAULT_CALCULATORS: bool = True
    CORS_ORIGINS: str = "http://localhost:3000"

    class Config:
        env_file = ".env"


settings = Settings()
