"""
Services - Collaborators outside the pure core

- Approval: Human-in-the-loop gates
- Git: Revision lookup for trace entries
- Lessons: Shared AGENTS.md lesson log
"""

from .approval import (
    ApprovalDecision, ApprovalRequest, ApprovalGate,
    StaticApprovalGate, CallbackApprovalGate, ConsoleApprovalGate,
)
from .git import GitIntegration
from .lessons import LessonLog

__all__ = [
    'ApprovalDecision', 'ApprovalRequest', 'ApprovalGate',
    'StaticApprovalGate', 'CallbackApprovalGate', 'ConsoleApprovalGate',
    'GitIntegration', 'LessonLog',
]
