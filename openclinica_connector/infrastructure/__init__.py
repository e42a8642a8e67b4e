"""Infrastructure layer for the OpenClinica connector.

This layer contains adapters for the OpenClinica web services and for file
I/O. It implements the ports defined in the application layer.
"""

__all__ = []
