"""
Payments module - Payment gateway integration.

This module contains the payment gateway port and the
PayPal Orders API adapter used by checkout.
"""
