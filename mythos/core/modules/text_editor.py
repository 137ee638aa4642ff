"""
DSPy Module for small editing helpers on Gemini 2.5 Flash.

Both helpers degrade quietly: a failed rewrite hands back the original text
and a failed analysis returns an empty string, so the editor never loses
the user's words.
"""

import logging
from typing import Optional

import dspy

from ..signatures import ConceptAnalysisSignature, RewriteSignature

logger = logging.getLogger(__name__)


class TextEditor(dspy.Module):
    """Rewrite passages and analyze story concepts."""

    def __init__(self, lm: Optional[dspy.LM] = None):
        super().__init__()
        self.lm = lm
        self.rewrite_text = dspy.Predict(RewriteSignature)
        self.analyze_concept = dspy.Predict(ConceptAnalysisSignature)

    def _call(self, predictor, **kwargs):
        if self.lm is not None:
            with dspy.context(lm=self.lm):
                return predictor(**kwargs)
        return predictor(**kwargs)

    def rewrite(self, text: str, instruction: str) -> str:
        """Rewrite text per instruction; returns the original text on any failure."""
        try:
            result = self._call(self.rewrite_text, text=text, instruction=instruction)
        except Exception as e:
            logger.error("Rewrite failed: %s", e)
            return text

        rewritten = (result.rewritten_text or "").strip()
        return rewritten or text

    def quick_analyze(self, text: str) -> str:
        """Short analysis of a story concept; empty string on any failure."""
        try:
            result = self._call(self.analyze_concept, concept=text)
        except Exception as e:
            logger.error("Quick analyze failed: %s", e)
            return ""
        return result.analysis or ""

    def forward(self, text: str, instruction: str) -> str:
        return self.rewrite(text, instruction)
