"""
Feature modules for the Aura client.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models (also the declared shapes of inbound payloads)
- service.py: Workflow implementation
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
Every workflow takes the Session as an explicit argument.
"""
