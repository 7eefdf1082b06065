import sys

from loguru import logger

import config, web_remote
from app import CamMatrixViewer
from camera_registry import load_registry
from sheets import SheetError, fetch_sheet_metadata


def configure_logging():
    logger.remove()
    logger.add(sys.stderr, level=config.LOG_LEVEL)
    logger.add(config.LOG_FILE, level=config.LOG_LEVEL, rotation="1 MB", retention=3)


def main():
    configure_logging()

    registry, error, title = None, None, config.DEFAULT_TITLE
    if not config.SHEET_ID or not config.API_KEY:
        error = "Sheet ID and API Key must be configured."
    else:
        title = fetch_sheet_metadata(config.SHEET_ID, config.API_KEY).title
        try:
            registry = load_registry(config.SHEET_ID, config.API_KEY, config.CAMS_TAB_NAME)
        except SheetError as exc:
            error = f"Failed to load cameras: {exc}"
            logger.error(error)

    viewer = CamMatrixViewer(registry, error=error, title=title)
    if config.WEB_REMOTE_ENABLED:
        web_remote.start(viewer)
    viewer.run()

if __name__ == "__main__":
    main()
