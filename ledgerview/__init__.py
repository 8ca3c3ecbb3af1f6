"""
Ledger Viewer - Source Package

A personal-finance ledger viewer: bank activities grouped by month,
free-text search across them, a tag dictionary cross-reference and
simple monthly spend charts.

LAYERS:
1. models        - immutable ledger records and view models
2. search        - tag resolution, search predicate, group filtering
3. presentation  - row banding/headers and the display model
4. services      - HTTP data sources
5. orchestrator  - loading flows wiring services to the view
"""

__version__ = "1.0.0"
__author__ = "Ledger Viewer Team"
