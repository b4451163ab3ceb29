"""
Notifications module - Customer notifications.

Sends the license e-mail once checkout issues a license.
"""
