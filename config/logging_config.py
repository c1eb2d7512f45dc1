import logging


def configure_logging(level: str = "INFO"):
    """Root logging setup shared by the HTTP service and the Lambda entry point."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    # basicConfig is a no-op when the runtime already installed a root handler
    logging.getLogger().setLevel(level.upper())
