from .workflow import create_audit_graph, LineItemAuditGraph
