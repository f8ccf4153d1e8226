"""Omnia gateway: FastAPI proxy in front of the Omnia assistant's AI vendors"""

__version__ = "1.0.0"
