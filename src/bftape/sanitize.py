"""Program text cleanup.

Keeps only the recognized instruction symbols, in their original order.
"""

# Structural and arithmetic symbols plus output. `,` (input) is not supported.
ALPHABET = "+-<>[]."


def cleanup(text: str) -> str:
    """Return `text` with every character outside ALPHABET removed."""
    return "".join(c for c in text if c in ALPHABET)
