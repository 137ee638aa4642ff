"""
DSPy Signature for a quick read on a story concept.
"""

import dspy


class ConceptAnalysisSignature(dspy.Signature):
    """
    Briefly analyze this concept for a story.

    Comment on its hook, the central conflict, and one risk to watch for.
    Keep it to a short paragraph.
    """

    concept: str = dspy.InputField(desc="A premise or idea typed into the story wizard")

    analysis: str = dspy.OutputField(desc="A brief analysis of the concept")
