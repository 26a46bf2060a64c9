import logging

from fastapi import FastAPI, Request


def setup_logging(app: FastAPI, level: str = "INFO") -> logging.Logger:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger("flashdeck")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Incoming request {request.method} {request.url}")
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code}")
        return response

    return logger
