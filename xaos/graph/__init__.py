"""Object graph — the nodes behind every Xaos object.

The graph layer provides:
- Nodes: an owned member mapping plus an explicit parent link
- Arena: id allocation, weak lookup by id, and the mutation lock
- Handles: attribute-style member resolution along the parent chain
"""
