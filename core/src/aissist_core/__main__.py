from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

import uvicorn

from aissist_core.app import LOG_FILENAME, create_app
from aissist_core.config import apply_env_overrides, load_server_config, runtime_paths
from aissist_core.home import resolve_home

logger = logging.getLogger("aissist_core")


def main() -> None:
    home = resolve_home()
    config = apply_env_overrides(load_server_config(home), os.environ)
    paths = runtime_paths(home, config)

    log_file = paths.logs_dir / LOG_FILENAME
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            RotatingFileHandler(
                log_file,
                maxBytes=config.logging.max_size_mb * 1024 * 1024,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            ),
            logging.StreamHandler(),
        ],
    )

    host = config.network.bind_host
    port = config.network.port
    logger.info("AIssist server listening on %s:%s", host, port)
    logger.info("Auth endpoints: /auth/signup, /auth/login, /auth/me, /auth/usage")
    logger.info("AI endpoints: /ai/chat, /ai/status")
    logger.info("Pages: /admin, /dashboard, /demo")

    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
