"""
Domain Layer - Pure Business Logic

This layer contains:
- Entities: Invoice aggregate, line items and payments
- Value Objects: Immutable objects without identity (Money)
- Services: Domain logic that doesn't fit in entities (identifier generation)

No external dependencies allowed in this layer, and nothing here logs.
"""
