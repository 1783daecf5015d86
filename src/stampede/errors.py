class ConfigError(Exception):
    """Fatal setup problem: bad arguments, unreadable input or a malformed request URL."""
