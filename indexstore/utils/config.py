"""Configuration management."""


class Config:
    """Configuration management."""

    # Storage settings
    DATA_FILENAME = 'storage.db'  # Default log file, relative to the working directory
    MAX_KEY_LEN = 256  # Keys longer than this never decode
    BYTE_ORDER = '<'  # struct byte order for every on-disk integer (little-endian)
    FSYNC_ON_WRITE = True  # os.fsync after every append/tombstone flush

    # Value range (signed 32-bit)
    MIN_VALUE = -2 ** 31
    MAX_VALUE = 2 ** 31 - 1

    # Logging settings
    LOG_LEVEL = 'WARNING'
    LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'

    # Command driver output
    NULL_TOKEN = 'null'  # Printed by find when a key has no live values
