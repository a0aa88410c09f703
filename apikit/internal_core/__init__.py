from .config import APIKitConfig, CredentialsMode, load_config
from .diagnostics import describe_error, log_event, sanitize_detail

__all__ = [
    "APIKitConfig",
    "CredentialsMode",
    "load_config",
    "describe_error",
    "log_event",
    "sanitize_detail",
]
