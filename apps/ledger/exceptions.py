"""
Domain exceptions for ledger app.

This module defines domain-specific exceptions raised by the ledger
services layer. They represent business rule violations, separate from
HTTP concerns, and fall into three kinds that views map to status codes.

Exception Hierarchy:
    LedgerServiceError (base)
    ├── LedgerNotFoundError            (404)
    │   ├── RoomNotFoundError
    │   ├── EntryNotFoundError
    │   ├── SplitNotFoundError
    │   └── MemberNotFoundError
    ├── LedgerPermissionError          (403)
    │   ├── NotRoomMemberError
    │   └── InsufficientRoleError
    └── LedgerValidationError          (400)
        ├── InvalidAmountError
        ├── MissingFieldError
        ├── SplitTotalMismatchError
        ├── DuplicateSplitMemberError
        ├── NoEligibleMembersError
        ├── EntryLockedError
        └── OverpaymentError

Usage:
    from apps.ledger.exceptions import LedgerServiceError

    try:
        entry = assign_splits(entry_id=entry_id, user=user, assignments=data)
    except LedgerServiceError as e:
        return error_response(e)
"""


class LedgerServiceError(Exception):
    """Base exception for all ledger service errors."""
    pass


# =============================================================================
# Not found
# =============================================================================

class LedgerNotFoundError(LedgerServiceError):
    """A referenced room, entry, split or member does not exist."""
    pass


class RoomNotFoundError(LedgerNotFoundError):
    """Raised when the room does not exist."""
    pass


class EntryNotFoundError(LedgerNotFoundError):
    """Raised when the ledger entry does not exist."""
    pass


class SplitNotFoundError(LedgerNotFoundError):
    """Raised when the ledger split does not exist."""
    pass


class MemberNotFoundError(LedgerNotFoundError):
    """
    Raised when a member ID does not belong to the room.

    Example:
        raise MemberNotFoundError(member_id)
    """

    def __init__(self, member_id, message=None):
        self.member_id = member_id
        super().__init__(message or f"Member not found: {member_id}")


# =============================================================================
# Authorization
# =============================================================================

class LedgerPermissionError(LedgerServiceError):
    """The caller lacks the role or relationship the operation requires."""
    pass


class NotRoomMemberError(LedgerPermissionError):
    """Raised when the caller is not a member of the room."""
    pass


class InsufficientRoleError(LedgerPermissionError):
    """Raised when the caller's role does not allow the operation."""
    pass


# =============================================================================
# Validation
# =============================================================================

class LedgerValidationError(LedgerServiceError):
    """A business rule or input constraint was violated."""
    pass


class InvalidAmountError(LedgerValidationError):
    """Raised when a monetary amount is malformed, a float, or not positive."""
    pass


class MissingFieldError(LedgerValidationError):
    """Raised when a required field is blank or empty."""
    pass


class SplitTotalMismatchError(LedgerValidationError):
    """
    Raised when manual split amounts don't add up to the entry total.

    Attributes:
        expected: The entry's total amount.
        actual: The sum of the submitted split amounts.
    """

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Split amounts must equal total amount. Expected: {expected}, Got: {actual}"
        )


class DuplicateSplitMemberError(LedgerValidationError):
    """Raised when the same member appears twice in one split assignment."""
    pass


class NoEligibleMembersError(LedgerValidationError):
    """Raised when an equal split finds nobody to split among."""
    pass


class EntryLockedError(LedgerValidationError):
    """Raised when an entry's state no longer allows the operation."""
    pass


class OverpaymentError(LedgerValidationError):
    """Raised when a payment exceeds what is owed and overpayment is disabled."""
    pass
