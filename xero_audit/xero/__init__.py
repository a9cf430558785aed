from .client import XeroClient
