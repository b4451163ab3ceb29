"""
Orders module - Checkout and license issuance.

This module handles:
- Order entity and pricing
- The order ledger
- The issuance pipeline: start checkout, capture payment,
  issue the license, notify the customer
"""
