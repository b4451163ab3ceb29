"""
Licenses module - License management.

This module handles:
- License key generation and format checks
- License entity and domain logic
- Validation with first-use hardware binding
- Administrator lifecycle actions (activate, deactivate, reset, renew, delete)
"""
