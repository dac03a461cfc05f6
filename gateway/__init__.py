"""API Gateway package.

Reverse proxy that forwards ``/goals`` requests to the Health Goal Service.
"""
