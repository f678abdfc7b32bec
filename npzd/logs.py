import sys
import warnings


LOGLEVELS = ("trace", "debug", "info", "warning", "error")


def setup_logging(loglevel="info", stream_sink=sys.stdout):
    """Configure the loguru logger used throughout npzd.

    Calling this again replaces the previous handler, so the log level can be
    changed at any time (e.g. through ``npzd.runtime_settings.loglevel``).
    """
    from loguru import logger

    handler_conf = dict(
        sink=stream_sink,
        level=loglevel.upper(),
        colorize=sys.stdout.isatty(),
        format="<level>{message}</level>",
    )

    logger.level("TRACE", color="<dim>")
    logger.level("DEBUG", color="<dim><cyan>")
    logger.level("INFO", color="")
    logger.level("SUCCESS", color="<dim><green>")
    logger.level("WARNING", color="<yellow>")
    logger.level("ERROR", color="<bold><red>")
    logger.level("CRITICAL", color="<bold><red><WHITE>")

    def showwarning(message, cls, source, lineno, *args):
        logger.warning(
            "{warning}: {message} ({source}:{lineno})",
            message=message,
            warning=cls.__name__,
            source=source,
            lineno=lineno,
        )

    warnings.showwarning = showwarning

    logger.configure(handlers=[handler_conf])
    logger.enable("npzd")

    return logger
