"""
DSPy Signature for rewriting a passage according to an instruction.

Used by the publisher's manuscript editor: select text, describe the change,
replace the selection with the result.
"""

import dspy


class RewriteSignature(dspy.Signature):
    """
    Rewrite the following text based on the instruction.

    Return ONLY the rewritten text, no commentary, no quotation marks,
    no preamble. Keep the original meaning unless the instruction says
    otherwise, and keep markdown headings intact.
    """

    text: str = dspy.InputField(desc="The passage to rewrite")

    instruction: str = dspy.InputField(
        desc="How to change it, e.g. 'make it more suspenseful' or 'shorten by half'"
    )

    rewritten_text: str = dspy.OutputField(desc="The rewritten passage only")
