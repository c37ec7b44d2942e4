"""Value object base classes: write-once attributes and component-based identity."""

# Standard library imports
from abc import ABC, abstractmethod
from functools import total_ordering
from typing import Any, Self


class ValueObject(ABC):
    """Immutable value identified entirely by its components.

    Subclasses list their state in ``_components()``; equality and hashing
    follow from it, so two instances with equal components are interchangeable.
    Attributes may be assigned once (in ``__init__``) and never again.
    """

    __slots__ = ()

    @abstractmethod
    def _components(self) -> tuple[Any, ...]:
        """Values that make up this object's identity."""

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        return self._components() == other._components()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, *self._components()))

    def __repr__(self) -> str:
        args = ", ".join(repr(component) for component in self._components())
        return f"{type(self).__name__}({args})"

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError(f"Cannot modify immutable value object attribute '{name}'")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Cannot delete immutable value object attribute '{name}'")

    # Immutable, so copies can be the instance itself
    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self


@total_ordering
class ComparableValueObject(ValueObject):
    """Value object with a total order over ``_ordering_key()``.

    ``_check_comparable`` runs before every ordering comparison and may raise
    when two instances exist in incompatible spaces (e.g. different currencies).
    """

    __slots__ = ()

    @abstractmethod
    def _ordering_key(self) -> Any:
        """Key compared by ``<``."""

    def _check_comparable(self, other: Self) -> None:
        """Raise if ``other`` cannot be ordered against this instance."""

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        self._check_comparable(other)  # type: ignore[arg-type]
        return bool(self._ordering_key() < other._ordering_key())  # type: ignore[attr-defined]
