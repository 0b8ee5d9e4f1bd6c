"""
Backend module for the decision drafting assistant.

Domain Structure:
- models/        - Operation kinds and typed double-check corrections
- double_check/  - Review, selection and reconciliation of corrections

Shared Infrastructure:
- config.py          - drafting.toml and .env loading
- logging_config.py  - Centralized logging (get_logger)
- exceptions.py      - Double-check error hierarchy
"""
