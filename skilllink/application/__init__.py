"""Application layer: use cases, services, DTOs, and ports.

Depends on the domain layer only; infrastructure implements the ports in
skilllink.application.interfaces.
"""
