"""
Ledger App - Shared Household Expenses

Records expenses against a room, divides them among the room's members
and tracks payments against each member's share.

Architecture:
- Models: LedgerEntry, LedgerSplit
- Services: entry management, split assignment, payment recording,
  balance aggregation
- Views: function views for room-scoped routes, a ViewSet for entries
- Exceptions: domain exception hierarchy mapped to 404/403/400
"""
