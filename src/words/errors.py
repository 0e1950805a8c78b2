"""Errors raised while loading the word vector vocabulary."""


class VocabularyLoadError(Exception):
    """The model file is missing, malformed or truncated.

    Raised at startup only; the process cannot run without a vocabulary.
    """
