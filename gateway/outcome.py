from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    error: Exception


Outcome = Union[Success[T], Failure]


def attempt(func: Callable[..., T], *args: Any, **kwargs: Any) -> "Outcome[T]":
    """
    Runs func and returns its result as a Success, or the raised exception as a Failure
    """
    try:
        return Success(func(*args, **kwargs))
    except Exception as e:
        return Failure(e)
