"""Structured logging with PII resolution.

This package provides leveled JSON logging on top of structlog, with log
fields that declare themselves as PII and are rendered according to the PII
mode of the logger writing them (as is, hashed, masked or removed).
"""

from .config import LogConfig, LogFormat, LogLevel, load_config, validate_config
from .default import (
    debug,
    debugf,
    debugw,
    error,
    errorf,
    errorw,
    fatal,
    fatalf,
    fatalw,
    get_logger,
    info,
    infof,
    infow,
    set_logger,
    sync,
    warn,
    warnf,
    warnw,
)
from .exceptions import (
    LoggerConfigurationError,
    LoggerNotInitializedError,
    LoggerPanicError,
    LoggerSyncError,
    LoggingError,
)
from .logger import Logger, must_new_logger, new_logger, new_nop_logger, resolve_pii_fields
from .pii import (
    ABSENT_PII_FIELD,
    AbsentPIIField,
    CustomPIIField,
    CustomResolveFunc,
    MaskFunc,
    PIIField,
    PIIMode,
    ResolvedPIIField,
    StandardPIIField,
    custom_pii,
    get_mask_func,
    hash_value,
    pii,
    set_mask_func,
)

__all__ = [
    "ABSENT_PII_FIELD",
    "AbsentPIIField",
    "CustomPIIField",
    "CustomResolveFunc",
    "LogConfig",
    "LogFormat",
    "LogLevel",
    "Logger",
    "LoggerConfigurationError",
    "LoggerNotInitializedError",
    "LoggerPanicError",
    "LoggerSyncError",
    "LoggingError",
    "MaskFunc",
    "PIIField",
    "PIIMode",
    "ResolvedPIIField",
    "StandardPIIField",
    "custom_pii",
    "debug",
    "debugf",
    "debugw",
    "error",
    "errorf",
    "errorw",
    "fatal",
    "fatalf",
    "fatalw",
    "get_logger",
    "get_mask_func",
    "hash_value",
    "info",
    "infof",
    "infow",
    "load_config",
    "must_new_logger",
    "new_logger",
    "new_nop_logger",
    "pii",
    "resolve_pii_fields",
    "set_logger",
    "set_mask_func",
    "sync",
    "validate_config",
    "warn",
    "warnf",
    "warnw",
]
