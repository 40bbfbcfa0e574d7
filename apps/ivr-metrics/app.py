import uvicorn
from dotenv import load_dotenv
from loguru import logger

from ivr_task_sync.config import Settings
from ivr_task_sync.logging import configure_pretty_logging
from ivr_task_sync.server.app import create_app

load_dotenv()


def main():
    settings = Settings()
    configure_pretty_logging(settings.log_level)
    logger.info(
        f"Starting IVR task sync on {settings.host}:{settings.port} "
        f"(workspace={settings.twilio_workspace_sid}, store={settings.state_store_backend})"
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Program terminated by user")
