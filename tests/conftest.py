"""Global pytest configuration and fixtures."""

# Standard library imports
from collections.abc import Callable, Iterator
from decimal import Decimal
from pathlib import Path

# Load test environment variables
from dotenv import load_dotenv

test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)

# Third-party imports
import pytest

# Local imports
from invoicing.application.config import reset_config
from invoicing.domain.entities import Invoice, LineItem
from invoicing.domain.services.identifiers import SequentialIdGenerator
from invoicing.domain.value_objects import Money
from invoicing.infrastructure.repositories import InMemoryInvoiceRepository


@pytest.fixture(autouse=True)
def _reset_global_config() -> Iterator[None]:
    """Keep the configuration singleton from leaking between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    """Provides deterministic ids: INV-000001, LI-000001, PAY-000001, ..."""
    return SequentialIdGenerator()


@pytest.fixture
def repository() -> InMemoryInvoiceRepository:
    """Provides an empty in-memory invoice repository."""
    return InMemoryInvoiceRepository()


@pytest.fixture
def make_line_item(
    id_generator: SequentialIdGenerator,
) -> Callable[..., LineItem]:
    """Factory for line items priced from canonical money strings."""

    def _make(
        product_id: str = "PROD-001",
        quantity: Decimal | int | str = 1,
        unit_price: str = "100.00 USD",
    ) -> LineItem:
        return LineItem.create(
            product_id=product_id,
            quantity=quantity,
            unit_price=Money.parse(unit_price),
            id_generator=id_generator,
        )

    return _make


@pytest.fixture
def draft_invoice(
    id_generator: SequentialIdGenerator, make_line_item: Callable[..., LineItem]
) -> Invoice:
    """Provides the sample draft invoice: 2 x 50.00 USD + 1 x 100.00 USD = 200.00 USD."""
    return Invoice.create(
        customer_id="CUST-123",
        line_items=[
            make_line_item("PROD-001", 2, "50.00 USD"),
            make_line_item("PROD-002", 1, "100.00 USD"),
        ],
        id_generator=id_generator,
    )
