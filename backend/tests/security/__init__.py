"""Security tests for the relay

This module contains security-focused tests including:
- Shared-secret authentication on the relay endpoint
- Rejection before any outbound call is made
"""
