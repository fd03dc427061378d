"""Run the API with uvicorn: ``python -m accounts``."""
import uvicorn

from accounts.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("accounts.app:create_app", factory=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
