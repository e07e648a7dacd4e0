import unicodedata


class TextNormalizer:
    """
    Normalizes text before it reaches the cipher engines.

    Engines keep every character they are given (case, punctuation and
    spacing are decided by the TransformPolicy), so normalization here is
    limited to Unicode composition: a letter typed as base + combining mark
    (e.g. "и" + U+0306) becomes the single code point the alphabet holds ("й").
    """

    def __init__(self, form: str = "NFC"):
        self.form = form

    def normalize(self, text: str) -> str:
        """
        Normalize text for the cipher engines.

        Args:
            text: Input text

        Returns:
            Text in the configured Unicode normal form
        """
        return unicodedata.normalize(self.form, text)

    def letters_only(self, text: str) -> str:
        """Drop every character that is not a letter."""
        return "".join(char for char in self.normalize(text) if char.isalpha())
