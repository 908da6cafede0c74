from winbootstrap.core.config.settings import (  # noqa: F401
    BootstrapConfig,
    ConfigError,
    load_config,
)
