from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import Optional

load_dotenv()  # picks up .env before the settings object is built

class Settings(BaseSettings):
    DATABASE_URL: str
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Redis is optional, distance lookups are not cached without it
    REDIS_URL: Optional[str] = None
    DISTANCE_CACHE_TTL_SECONDS: int = 6 * 3600

    # Google Distance Matrix
    GOOGLE_API_KEY: Optional[str] = None
    GOOGLE_DISTANCE_BASE_URL: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    DISTANCE_TIMEOUT_SECONDS: float = 10.0

    # Itinerary scheduling
    DEFAULT_CHECKIN_TIME: str = "15:00"
    DEFAULT_CHECKOUT_TIME: str = "12:00"
    LATE_NIGHT_FLIGHT_THRESHOLD: str = "06:00"
    CHECKOUT_BUFFER_MINUTES: int = 0

    # Optimistic concurrency on trip writes
    TRIP_WRITE_RETRIES: int = 3

    LOG_LEVEL: str = "INFO"

    PROJECT_NAME: str = "Itinerary Planner API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Trip itinerary composition, smart checkout and ride planning API"

    class Config:
        env_file = ".env"


settings = Settings()
