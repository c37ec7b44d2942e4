"""
Application Layer - Use Cases and Orchestration

This layer contains:
- Use cases: Commands that change invoices and queries that read them
- Interfaces: Repository contracts and abstractions
- Configuration: Typed settings and their loaders

Depends on domain layer, orchestrates business logic.
Defines interfaces that infrastructure layer must implement.
"""
