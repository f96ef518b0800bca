import uvicorn

from clickbridge.core.config import settings


def main():
    uvicorn.run("clickbridge.main:app", host="0.0.0.0", port=settings.PORT, proxy_headers=True)


if __name__ == "__main__":
    main()
