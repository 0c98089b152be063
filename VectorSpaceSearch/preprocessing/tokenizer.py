import re
from abc import ABC, abstractmethod


class Token:
    """A single token extracted from a document."""

    def __init__(self, text: str, position: int):
        self.text = text
        self.position = position
        self.processed_form = text

    def __repr__(self):
        return f"Token({self.text!r}, {self.position}, processed_form={self.processed_form!r})"


class Tokenizer(ABC):
    @abstractmethod
    def tokenize(self, document: str) -> list[Token]:
        raise NotImplementedError()


class AlphabeticTokenizer(Tokenizer):
    """
    Splits text into maximal runs of alphabetic characters.
    Every other character (digits, punctuation, underscores, whitespace) is a separator.
    """

    # \w minus digits and underscore leaves the Unicode letters
    pattern = re.compile(r"[^\W\d_]+")

    def tokenize(self, document: str) -> list[Token]:
        return [Token(match.group(), match.start()) for match in self.pattern.finditer(document)]
