from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    BACKEND_URL: str = "http://localhost:8000"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 5173
    REQUEST_TIMEOUT_SECONDS: Optional[float] = 10.0
    PLACEHOLDER_IMAGE_URL: str = "https://placehold.co/96x96?text=Item"
    SCENE_URL: str = "https://prod.spline.design/41MGRk-UDPKO-l6W/scene.splinecode"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def request_timeout(self) -> Optional[float]:
        # 0 or unset means wait indefinitely
        return self.REQUEST_TIMEOUT_SECONDS or None


settings = Settings()
