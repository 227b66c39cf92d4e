from typing import TypeVar, Callable

T = TypeVar('T')

# Called once per visited key during an in-order traversal.
Visitor = Callable[[T], None]


def print_object(x: T) -> None:
    print(x)
