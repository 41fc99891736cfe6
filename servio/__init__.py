"""Servio restaurant operations: domain events and notification delivery."""
