from .base_connector import DocumentationProvider
from .man import ManConnector

__all__ = ["DocumentationProvider", "ManConnector"]
