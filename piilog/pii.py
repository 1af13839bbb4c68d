"""PII fields for structured log statements.

A PII field wraps a single sensitive key/value pair. It is not rendered when
it is created but when a logger writes it: the logger hands its own PII mode
to ``resolve`` and writes whatever comes back. Depending on the mode the value
is written as is, replaced by its SHA-256 digest, passed through the
process-wide mask function or dropped from the record.

Example:
-------
    logger.infow("user signed in", pii("email", user.email), "attempts", 2)

"""

import hashlib
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class PIIMode(str, Enum):
    """How a logger resolves PII fields."""

    # Leave PII fields as they are.
    NONE = "none"
    # Replace the value by its SHA-256 hex digest, keep the key.
    HASH = "hash"
    # Hand the field to the installed mask function. Without one the field
    # is omitted.
    MASK = "mask"
    # Omit PII fields from the record.
    REMOVE = "remove"


@dataclass(frozen=True)
class ResolvedPIIField:
    """A key/value pair ready to be written. An empty key omits the field."""

    key: str
    value: Any

    @property
    def omitted(self) -> bool:
        return self.key == ""


MaskFunc = Callable[[str, str], ResolvedPIIField]
CustomResolveFunc = Callable[[PIIMode, str, str], ResolvedPIIField]

_mask_func: MaskFunc | None = None
_mask_func_lock = threading.Lock()


def set_mask_func(func: MaskFunc | None) -> None:
    """Install the function used by standard PII fields in ``mask`` mode.

    The function is called concurrently from every thread that logs, so it
    must be thread-safe. Passing ``None`` uninstalls it, after which masked
    PII fields are omitted.
    """
    global _mask_func

    with _mask_func_lock:
        _mask_func = func


def get_mask_func() -> MaskFunc | None:
    """Return the currently installed mask function."""
    return _mask_func


def hash_value(value: Any) -> str:
    """Create the SHA-256 hex digest of a value.

    Bytes are hashed as they are, anything else as the UTF-8 encoding of its
    ``str()`` form.
    """
    raw = value if isinstance(value, bytes) else str(value).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


class PIIField(ABC):
    """A log field whose rendering depends on the PII mode of the logger."""

    __slots__ = ("key", "value")

    def __init__(self, key: str, value: Any) -> None:
        self.key = key
        self.value = value

    @abstractmethod
    def resolve(self, mode: PIIMode) -> ResolvedPIIField | None:
        """Resolve the field for ``mode``. ``None`` omits it."""

    def __repr__(self) -> str:
        # Never leak the value through repr().
        return f"{type(self).__name__}(key={self.key!r})"


class StandardPIIField(PIIField):
    """PII field handled by the logger's mode alone."""

    __slots__ = ()

    def resolve(self, mode: PIIMode) -> ResolvedPIIField | None:
        if mode == PIIMode.NONE:
            return ResolvedPIIField(self.key, self.value)
        if mode == PIIMode.HASH:
            return ResolvedPIIField(self.key, hash_value(self.value))
        if mode == PIIMode.MASK:
            mask = _mask_func
            if mask is None:
                return None
            return mask(self.key, self.value)
        # remove, and any mode this version does not know about
        return None


class CustomPIIField(PIIField):
    """PII field resolved by its own function for every mode."""

    __slots__ = ("resolve_func",)

    def __init__(self, key: str, value: str, resolve_func: CustomResolveFunc) -> None:
        super().__init__(key, value)
        self.resolve_func = resolve_func

    def resolve(self, mode: PIIMode) -> ResolvedPIIField | None:
        return self.resolve_func(mode, self.key, self.value)


class AbsentPIIField(PIIField):
    """The field returned for a custom PII field that could not be built."""

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("", "")

    def __bool__(self) -> bool:
        return False

    def resolve(self, mode: PIIMode) -> ResolvedPIIField | None:
        return None

    def __repr__(self) -> str:
        return "ABSENT_PII_FIELD"


ABSENT_PII_FIELD = AbsentPIIField()


def pii(key: str, value: Any) -> StandardPIIField:
    """Create a standard PII field.

    The value is resolved with the PII mode of the logger that writes it.
    """
    return StandardPIIField(key, value)


def custom_pii(
    key: str, value: str, resolve_func: CustomResolveFunc | None
) -> CustomPIIField | AbsentPIIField:
    """Create a PII field with its own resolve function.

    Returns ``ABSENT_PII_FIELD`` instead of raising when the key or value is
    empty or no function is given, so a broken field never breaks the log
    call. The absent field is falsy, so callers check it with ``if field:``.
    Loggers drop it wherever it appears, together with the key it is the
    value of. ``resolve_func`` receives the logger's mode, the key and the
    value and must be thread-safe.
    """
    if not key or not value or resolve_func is None:
        return ABSENT_PII_FIELD

    return CustomPIIField(key, value, resolve_func)
