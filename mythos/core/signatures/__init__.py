from .rewrite import RewriteSignature
from .concept_analysis import ConceptAnalysisSignature

__all__ = [
    "RewriteSignature",
    "ConceptAnalysisSignature",
]
