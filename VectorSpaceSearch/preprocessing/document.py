from typing import Dict, List, Optional

from .tokenizer import Tokenizer, AlphabeticTokenizer, Token
from .preprocess import PreprocessingPipeline


class Document:
    """
    Represents a document in the search engine.
    Stores document contents and preprocessed data.
    """

    def __init__(self, id, text: str = "", title: str = "", path: Optional[str] = None,
                 metadata: Dict = None):
        """
        Initialize a document with content.

        Args:
            id: Unique identifier for the document
            text: Main document text
            title: Document title
            path: File the document was read from, if any
            metadata: Additional document metadata
        """
        self.id = id
        self.title = title
        self.text = text
        self.path = path
        self.metadata = metadata or {}

        # Combined text for processing
        self.combined_text = f"{title} {text}".strip()
        self.tokens: Optional[List[Token]] = None
        self.processed_tokens: Optional[List[Token]] = None

    def __repr__(self):
        return f"Document(id={self.id!r}, title={self.title!r})"

    def tokenize(self, tokenizer: Tokenizer = None) -> 'Document':
        """
        Tokenize the document content.

        Args:
            tokenizer: Tokenizer to use (defaults to AlphabeticTokenizer)

        Returns:
            Self for chaining operations
        """
        tokenizer = tokenizer or AlphabeticTokenizer()
        self.tokens = tokenizer.tokenize(self.combined_text)
        return self

    def preprocess(self, preprocessing_pipeline: PreprocessingPipeline) -> 'Document':
        """
        Preprocess the document tokens.

        Args:
            preprocessing_pipeline: Pipeline of preprocessors to apply

        Returns:
            Self for chaining operations
        """
        if self.tokens is None:
            self.tokenize(preprocessing_pipeline.tokenizer)

        self.processed_tokens = preprocessing_pipeline.preprocess(self.tokens, self.combined_text)
        return self

    def get_preprocessed_terms(self) -> List[str]:
        """
        Get the preprocessed terms from the document.

        Returns:
            List of preprocessed terms (non-empty)
        """
        if not self.processed_tokens:
            return []

        return [token.processed_form for token in self.processed_tokens
                if token.processed_form]
