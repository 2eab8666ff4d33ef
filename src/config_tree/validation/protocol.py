from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ValidatorProtocol(Protocol):
    def __call__(self, value: Any) -> bool:  # return False to reject the value
        ...
