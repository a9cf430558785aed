# Audit workflow nodes
from .resolve import make_resolve_account_node
from .load import make_load_line_items_node
from .audit import audit_node
from .report import report_node
