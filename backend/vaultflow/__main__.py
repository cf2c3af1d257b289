import argparse

import uvicorn

from vaultflow.config import settings


def main():
    parser = argparse.ArgumentParser(description="vaultflow vault addition service")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args()

    uvicorn.run("vaultflow.main:app", host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
