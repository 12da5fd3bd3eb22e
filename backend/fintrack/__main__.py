import uvicorn

from fintrack.config import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run("fintrack.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
