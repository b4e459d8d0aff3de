import logging
import signal
import sys
from typing import Optional

from app_config import (
    AppConfigurationError,
    load_app_config,
    load_secret_config,
    resolve_config_path,
)
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from server import ServerConfigurationError, UIServer, UIServerConfig
from tips import ConfigurationError, MindfulnessTipProvider, TipConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("zen_pomodoro")


def setup_signal_handlers(runtime: RuntimeEngine) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""

    def signal_handler(signum: int, frame) -> None:
        del frame
        signal_name = signal.Signals(signum).name
        runtime.request_stop(0, reason=f"{signal_name} received")

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def main() -> int:
    """Run the timer widget runtime and its UI server."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config(str(config_path))
        secret_config = load_secret_config()
        logger.info("Loaded runtime config: %s", config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    try:
        tip_config = TipConfig.from_settings(
            app_config.tips,
            api_key=secret_config.gemini_api_key,
        )
    except ConfigurationError as error:
        logger.error("Tip configuration error: %s", error)
        return 1

    tip_provider = MindfulnessTipProvider(tip_config, logger=logging.getLogger("tips"))
    if tip_provider.enabled:
        logger.info("Mindfulness tips enabled (model: %s)", tip_config.model)
    else:
        logger.warning("GEMINI_API_KEY not set or tips disabled; using fallback tips.")

    # Optional UI server for static page + websocket updates
    ui_server: Optional[UIServer] = None
    ui_server_config: Optional[UIServerConfig] = None
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        logger.warning("Continuing without UI server.")

    if ui_server_config and ui_server_config.enabled:
        ui_server = UIServer(
            config=ui_server_config,
            logger=logging.getLogger("ui_server"),
        )

    runtime = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            app_config=app_config,
            tip_provider=tip_provider,
            ui_server=ui_server,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
        )
    )

    if ui_server is not None:
        try:
            logger.info("Starting UI server...")
            ui_server.start(timeout_seconds=5.0)
            logger.info(
                "UI server ready at http://%s:%d",
                ui_server.host,
                ui_server.port,
            )
        except (OSError, RuntimeError) as error:
            logger.error("UI server startup failed: %s", error)
            logger.warning("Continuing without UI server.")

    return runtime.run()


if __name__ == "__main__":
    sys.exit(main())
