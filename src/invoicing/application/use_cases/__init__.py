"""
Application Use Cases Layer

Use cases coordinate between the invoice aggregate and its repository to
implement invoicing workflows while maintaining clean architecture boundaries.
"""

from .base import UseCase, UseCaseRequest, UseCaseResponse
from .base_request import BaseRequestDTO
from .invoices import (
    AddLineItemRequest,
    AddLineItemUseCase,
    CancelInvoiceRequest,
    CancelInvoiceUseCase,
    CreateInvoiceRequest,
    CreateInvoiceUseCase,
    DeleteInvoiceRequest,
    DeleteInvoiceResponse,
    DeleteInvoiceUseCase,
    GetInvoiceRequest,
    GetInvoiceUseCase,
    InvoiceResponse,
    InvoiceSummary,
    IssueInvoiceRequest,
    IssueInvoiceUseCase,
    LineItemInput,
    LineItemSummary,
    ListCustomerInvoicesRequest,
    ListCustomerInvoicesUseCase,
    ListInvoicesResponse,
    RecordPaymentRequest,
    RecordPaymentResponse,
    RecordPaymentUseCase,
    RemoveLineItemRequest,
    RemoveLineItemUseCase,
)

__all__ = [
    # Base
    "UseCase",
    "UseCaseRequest",
    "UseCaseResponse",
    "BaseRequestDTO",
    # Invoices
    "CreateInvoiceUseCase",
    "CreateInvoiceRequest",
    "LineItemInput",
    "AddLineItemUseCase",
    "AddLineItemRequest",
    "RemoveLineItemUseCase",
    "RemoveLineItemRequest",
    "IssueInvoiceUseCase",
    "IssueInvoiceRequest",
    "RecordPaymentUseCase",
    "RecordPaymentRequest",
    "RecordPaymentResponse",
    "CancelInvoiceUseCase",
    "CancelInvoiceRequest",
    "GetInvoiceUseCase",
    "GetInvoiceRequest",
    "ListCustomerInvoicesUseCase",
    "ListCustomerInvoicesRequest",
    "ListInvoicesResponse",
    "DeleteInvoiceUseCase",
    "DeleteInvoiceRequest",
    "DeleteInvoiceResponse",
    "InvoiceResponse",
    "InvoiceSummary",
    "LineItemSummary",
]
