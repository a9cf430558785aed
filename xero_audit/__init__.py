"""
Xero ingestion audit - diagnostics over line items synced from Xero
"""
__version__ = "1.0.0"
