"""poolctl — declarative Azure SQL elastic pool provisioning."""

__version__ = "0.1.0"
