from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    api_base_url: str = "http://localhost:3123/api"  # Base URL of the notes API, all backend paths are joined onto it
    host: str = "127.0.0.1"
    port: int = 5173
    debug: bool = False  # Also disables the Secure flag on session cookies
    backend_timeout: float = 30.0  # Seconds before an outbound notes API call is abandoned

    model_config = {
        "env_file": [".env"],
        "env_prefix": "NOTESWEB_",
        "extra": "ignore",
    }

    @property
    def secure_cookies(self) -> bool:
        return not self.debug
