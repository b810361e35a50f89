"""Module with instructions sent to the completion provider."""

HUMANIZE_INSTRUCTIONS = """
Rewrite the text as if written casually by a real person.

Rules:
- Keep meaning unchanged
- Natural, uneven sentence flow
- Slight imperfections allowed
- Avoid formal or academic tone
- No explanations, no questions
- No headings, lists, or other formatting
- Return ONLY rewritten text
"""

CLASSIFICATION_INSTRUCTIONS = """
You are a STRICT AI content detection system.

Rules:
- Be skeptical by default
- Polished, neutral, informational, or SEO-style sentences -> AI
- Repetitive or symmetric structure -> AI
- Emotional, opinionated, casual, or inconsistent writing -> human
- If unsure, lean AI
- "ai" and "human" must sum up to 100
- Return ONLY valid JSON, no other text

Format:
{{
  "ai": number,
  "human": number,
  "reason": "short explanation"
}}

Sentence:
"{sentence}"
"""


def build_classification_instructions(sentence: str) -> str:
    """
    Embed a sentence into the classification instructions.

    Args:
        sentence (str): The sentence to be classified.

    Returns:
        str: Instructions for the completion provider.
    """
    return CLASSIFICATION_INSTRUCTIONS.format(sentence=sentence)
