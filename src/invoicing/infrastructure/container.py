"""
Dependency Injection Container - Central container for application dependencies.

This module wires the repository, the identifier generator and the invoice use
cases from an ApplicationConfig.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar, cast

from invoicing.application.config import ApplicationConfig, get_config
from invoicing.application.interfaces.repositories import IInvoiceRepository
from invoicing.application.use_cases import (
    AddLineItemUseCase,
    CancelInvoiceUseCase,
    CreateInvoiceUseCase,
    DeleteInvoiceUseCase,
    GetInvoiceUseCase,
    IssueInvoiceUseCase,
    ListCustomerInvoicesUseCase,
    RecordPaymentUseCase,
    RemoveLineItemUseCase,
)
from invoicing.domain.services.identifiers import (
    IIdGenerator,
    SequentialIdGenerator,
    UuidIdGenerator,
)
from invoicing.infrastructure.repositories import InMemoryInvoiceRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_id_generator(strategy: str) -> IIdGenerator:
    """Create the id generator named by a configuration strategy."""
    if strategy == "uuid":
        return UuidIdGenerator()
    if strategy == "sequential":
        return SequentialIdGenerator()
    raise ValueError(f"Unknown id strategy: {strategy}")


class DIContainer:
    """
    Dependency Injection Container for the invoicing system.

    Infrastructure components (repository, id generator) are singletons;
    use cases are built fresh on every ``get``.
    """

    def __init__(self, config: ApplicationConfig | None = None) -> None:
        """Initialize the container with configuration."""
        self.config = config or get_config()
        self.config.validate()

        self._singletons: dict[type[Any], Any] = {}
        self._factories: dict[type[Any], Callable[[], Any]] = {}
        self._singleton_types: set[type[Any]] = set()

        self._register_infrastructure()
        self._register_use_cases()

        logger.info(
            "Dependency injection container initialized",
            extra={
                "environment": self.config.environment.value,
                "id_strategy": self.config.invoicing.id_strategy,
            },
        )

    def _register_infrastructure(self) -> None:
        """Register infrastructure components."""
        self._register_singleton(
            IIdGenerator,
            lambda: create_id_generator(self.config.invoicing.id_strategy),
        )
        self._register_singleton(
            IInvoiceRepository,  # type: ignore[type-abstract]
            InMemoryInvoiceRepository,
        )

    def _register_use_cases(self) -> None:
        """Register all use cases."""
        self._register_factory(
            CreateInvoiceUseCase,
            lambda: CreateInvoiceUseCase(
                repository=self._repository(),
                id_generator=self._id_generator(),
                default_currency=self.config.invoicing.default_currency,
            ),
        )
        self._register_factory(
            AddLineItemUseCase,
            lambda: AddLineItemUseCase(
                repository=self._repository(), id_generator=self._id_generator()
            ),
        )
        self._register_factory(
            RecordPaymentUseCase,
            lambda: RecordPaymentUseCase(
                repository=self._repository(), id_generator=self._id_generator()
            ),
        )
        self._register_factory(
            RemoveLineItemUseCase, lambda: RemoveLineItemUseCase(repository=self._repository())
        )
        self._register_factory(
            IssueInvoiceUseCase, lambda: IssueInvoiceUseCase(self._repository())
        )
        self._register_factory(
            CancelInvoiceUseCase, lambda: CancelInvoiceUseCase(self._repository())
        )
        self._register_factory(GetInvoiceUseCase, lambda: GetInvoiceUseCase(self._repository()))
        self._register_factory(
            ListCustomerInvoicesUseCase, lambda: ListCustomerInvoicesUseCase(self._repository())
        )
        self._register_factory(
            DeleteInvoiceUseCase, lambda: DeleteInvoiceUseCase(self._repository())
        )

    def _repository(self) -> IInvoiceRepository:
        return self.get(IInvoiceRepository)  # type: ignore[type-abstract]

    def _id_generator(self) -> IIdGenerator:
        return self.get(IIdGenerator)  # type: ignore[type-abstract]

    def _register_singleton(self, cls: type[T], factory: Callable[[], Any]) -> None:
        """Register a singleton component."""
        self._factories[cls] = factory
        self._singleton_types.add(cls)

    def _register_factory(self, cls: type[T], factory: Callable[[], Any]) -> None:
        """Register a factory for creating instances."""
        self._factories[cls] = factory

    def get(self, cls: type[T]) -> T:
        """
        Get an instance of a registered component.

        Args:
            cls: The class type to retrieve

        Returns:
            Instance of the requested class

        Raises:
            KeyError: If the class is not registered
        """
        if cls in self._singletons:
            return cast(T, self._singletons[cls])

        if cls not in self._factories:
            raise KeyError(f"No registration found for {cls.__name__}")

        instance = self._factories[cls]()

        if cls in self._singleton_types:
            self._singletons[cls] = instance

        return cast(T, instance)

    def has(self, cls: type[T]) -> bool:
        """Check if a component is registered."""
        return cls in self._factories

    def register(self, cls: type[T], instance: T) -> None:
        """
        Register a pre-created instance, e.g. a database-backed repository.

        Args:
            cls: The class type
            instance: The instance to register
        """
        self._singletons[cls] = instance
        self._factories[cls] = lambda: instance
        self._singleton_types.add(cls)


def create_container(config: ApplicationConfig | None = None) -> DIContainer:
    """Create a container from the given or global configuration."""
    return DIContainer(config)
