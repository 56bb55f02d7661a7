"""
Assignments module.

Binds names to contexts, optionally per OIDC property, and reconciles
bulk submissions against the stored state.

Public API:
- IAssignmentService: Interface for assignment operations
- Assignment: A stored binding
- reconcile: Pure classification of a submission
"""

from .interfaces import IAssignmentService
from .models import (
    Assignment,
    AssignmentKey,
    AssignmentTarget,
    assignment_key,
    CreateAssignmentRequest,
    UpdateAssignmentRequest,
    BulkAssignmentEntry,
    BulkAssignmentRequest,
    BulkAssignmentResponse,
    OIDCAssignmentRequest,
    OIDCBatchEntry,
    OIDCBatchRequest,
    OIDCBatchResponse,
    ReconciliationSummary,
)
from .reconciler import ChangeKind, PlannedChange, ReconciliationPlan, reconcile
from .exceptions import (
    AssignmentNotFoundError,
    DuplicateAssignmentTargetError,
    AssignmentOwnershipError,
    BatchLimitExceededError,
    RequiredPropertyRemovalError,
    AssignmentStateReadError,
)

__all__ = [
    # Interface
    "IAssignmentService",
    # Models
    "Assignment",
    "AssignmentKey",
    "AssignmentTarget",
    "assignment_key",
    "CreateAssignmentRequest",
    "UpdateAssignmentRequest",
    "BulkAssignmentEntry",
    "BulkAssignmentRequest",
    "BulkAssignmentResponse",
    "OIDCAssignmentRequest",
    "OIDCBatchEntry",
    "OIDCBatchRequest",
    "OIDCBatchResponse",
    "ReconciliationSummary",
    # Reconciliation
    "ChangeKind",
    "PlannedChange",
    "ReconciliationPlan",
    "reconcile",
    # Exceptions
    "AssignmentNotFoundError",
    "DuplicateAssignmentTargetError",
    "AssignmentOwnershipError",
    "BatchLimitExceededError",
    "RequiredPropertyRemovalError",
    "AssignmentStateReadError",
]
