"""
Preprocessing module for turning raw text into vocabulary terms.
Includes tokenization, lowercase conversion and stop word filtering.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set
import json
import os

from loguru import logger

from .tokenizer import AlphabeticTokenizer, Token, Tokenizer


class TokenPreprocessor(ABC):
    @abstractmethod
    def preprocess(self, token: Token, document: str) -> Token:
        raise NotImplementedError()

    def preprocess_all(self, tokens: list[Token], document: str) -> list[Token]:
        return [self.preprocess(token, document) for token in tokens]


class LowercasePreprocessor(TokenPreprocessor):
    def preprocess(self, token: Token, document: str) -> Token:
        token.processed_form = token.processed_form.lower()
        return token


class StopWordsPreprocessor(TokenPreprocessor):
    """Preprocessor for removing stop words."""

    def __init__(self, stop_words: Iterable[str] = ()):
        """
        Initialize preprocessor for removing stop words.

        Args:
            stop_words: Words to blank out; compared case-insensitively
        """
        self.stop_words = {word.strip().lower() for word in stop_words if word.strip()}

    def preprocess(self, token: Token, document: str) -> Token:
        """
        If token is a stop word, replace its processed_form with empty string.

        Args:
            token: Token to process
            document: Original document

        Returns:
            Processed token
        """
        if token.processed_form.lower() in self.stop_words:
            token.processed_form = ""
        return token


class PreprocessingPipeline:
    """Pipeline of token preprocessors."""

    def __init__(self, preprocessors, tokenizer: Optional[Tokenizer] = None, name="Default Pipeline"):
        """
        Initialize a preprocessing pipeline.

        Args:
            preprocessors: List of preprocessor objects
            tokenizer: Tokenizer used by process_text (defaults to AlphabeticTokenizer)
            name: Name of the pipeline
        """
        self.preprocessors = preprocessors
        self.tokenizer = tokenizer or AlphabeticTokenizer()
        self.name = name

    def preprocess(self, tokens: list[Token], document: str) -> list[Token]:
        """
        Apply all preprocessors to the tokens.

        Args:
            tokens: List of tokens to preprocess
            document: Original document text

        Returns:
            List of preprocessed tokens
        """
        for preprocessor in self.preprocessors:
            preprocessor.preprocess_all(tokens, document)

        return tokens

    def process_text(self, text: str) -> List[str]:
        """
        Tokenize and preprocess raw text.

        Args:
            text: Raw text

        Returns:
            Non-empty terms in text order
        """
        tokens = self.preprocess(self.tokenizer.tokenize(text), text)
        return [token.processed_form for token in tokens if token.processed_form]

    def process_tokens(self, tokens: Iterable[str]) -> List[str]:
        """
        Normalize tokens that were already split by the caller.

        Each token is run through the tokenizer again, so a token such as
        "Cat," yields the same term as the raw text "Cat,".
        """
        terms = []
        for token in tokens:
            terms.extend(self.process_text(token))
        return terms


def create_pipeline(stop_words: Optional[Iterable[str]] = None) -> PreprocessingPipeline:
    """
    Create the standard pipeline: alphabetic tokenization, lowercase, stop words.

    Args:
        stop_words: Optional stop words to remove

    Returns:
        Preprocessing pipeline
    """
    preprocessors = [LowercasePreprocessor()]
    if stop_words:
        preprocessors.append(StopWordsPreprocessor(stop_words))
    return PreprocessingPipeline(preprocessors)


def preprocess_text(text: str, pipeline: Optional[PreprocessingPipeline] = None) -> List[str]:
    """
    Preprocess text and return its terms.

    Args:
        text: Text to preprocess
        pipeline: Preprocessing pipeline to use (defaults to create_pipeline())

    Returns:
        List of terms in text order
    """
    pipeline = pipeline or create_pipeline()
    return pipeline.process_text(text)


def load_stop_words(path: str, encoding: str = "utf-8") -> Set[str]:
    """
    Load stop words from a file.

    A ``.json`` file must contain a list of words; any other file is read as
    one word per line. Blank lines are skipped.

    Args:
        path: Path to the stop words file
        encoding: File encoding

    Returns:
        Set of lower-cased stop words
    """
    with open(path, "r", encoding=encoding) as f:
        if os.path.splitext(path)[1].lower() == ".json":
            words = json.load(f)
        else:
            words = f.read().splitlines()

    stop_words = {word.strip().lower() for word in words if word.strip()}
    logger.debug("Loaded {} stop words from {}", len(stop_words), path)
    return stop_words
