"""
Infrastructure Layer - Concrete implementations of application interfaces

Contains the in-memory invoice repository, structured logging setup and the
dependency injection container.
"""
