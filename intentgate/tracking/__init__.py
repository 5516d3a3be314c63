"""
Tracking - Provenance for agent writes

- Classifier: AST_REFACTOR vs INTENT_EVOLUTION
- Audit: Builds and appends trace entries
"""

from .classifier import MutationClass, MutationClassifier, HeuristicClassifier
from .audit import AuditLogger

__all__ = ['MutationClass', 'MutationClassifier', 'HeuristicClassifier', 'AuditLogger']
