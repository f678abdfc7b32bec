from npzd import logger


def lock_runtime_settings():
    """Freeze runtime settings once the backend has been chosen for the core modules"""
    from npzd import runtime_settings as rs
    from npzd.backend import BACKEND_MESSAGES, get_current_device_name

    if rs.__locked__:
        return

    logger.opt(colors=True).debug(
        "Using computational backend <bold>{}</bold> on <bold>{}</bold>", rs.backend, get_current_device_name()
    )
    extra_message = BACKEND_MESSAGES.get(rs.backend)
    if extra_message:
        logger.debug("  {}", extra_message)

    rs.__locked__ = True
    logger.trace("Runtime settings are now locked")


lock_runtime_settings()
