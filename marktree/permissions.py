from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Iterable, Set, Union

from .errors import SecurityError, ValidationError
from .log import get_logger

log = get_logger(__name__)


class Operation(str, Enum):
    GET = "get"
    ADD = "add"
    REMOVE = "remove"


READ_CAPABILITY = "http://tizen.org/privilege/bookmark.read"
WRITE_CAPABILITY = "http://tizen.org/privilege/bookmark.write"

DEFAULT_CAPABILITIES: Dict[str, FrozenSet[Operation]] = {
    READ_CAPABILITY: frozenset({Operation.GET}),
    WRITE_CAPABILITY: frozenset({Operation.ADD, Operation.REMOVE}),
}


def to_operation(value: Union[Operation, str]) -> Operation:
    if isinstance(value, Operation):
        return value
    try:
        return Operation(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"unknown bookmark operation: {value!r}") from None


class PermissionGate:
    """Tracks which manager operations are currently allowed.

    Starts open. The first non-empty registration closes the gate except
    for the operations it names; later registrations only add. An empty
    registration reopens everything.
    """

    def __init__(self, capabilities: Dict[str, FrozenSet[Operation]] | None = None):
        self.capabilities = dict(DEFAULT_CAPABILITIES if capabilities is None else capabilities)
        self.allow_all = True
        self.granted: Set[Operation] = set()

    def set_permissions(self, capability: str, operations: Iterable[Union[Operation, str]]) -> None:
        if isinstance(operations, str):
            operations = [operations]
        ops = [to_operation(o) for o in operations]
        if not ops:
            self.allow_all = True
            log.debug("Capability %s reopened all bookmark operations.", capability)
            return
        self.allow_all = False
        self.granted.update(ops)
        log.debug("Capability %s granted: %s", capability, ", ".join(sorted(o.value for o in ops)))

    def register_features(self, capabilities: Iterable[str]) -> None:
        """Apply the built-in operation table for each named capability."""
        if isinstance(capabilities, str):
            capabilities = [capabilities]
        for name in capabilities:
            ops = self.capabilities.get(name)
            if ops is None:
                log.warning("Unknown bookmark capability ignored: %s", name)
                continue
            self.set_permissions(name, ops)
            if not ops:
                return

    def allows(self, op: Union[Operation, str]) -> bool:
        return self.allow_all or to_operation(op) in self.granted

    def check(self, op: Union[Operation, str]) -> None:
        op = to_operation(op)
        if not self.allows(op):
            raise SecurityError(f"bookmark operation '{op.value}' is not permitted")

    def reset(self) -> None:
        self.allow_all = True
        self.granted.clear()
