# keygate/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Application initialization and default application record
- db: Database configuration and connection management
- errors: Error taxonomy shared by the validator and the HTTP layer
"""
