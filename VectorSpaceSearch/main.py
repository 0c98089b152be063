import argparse
import json
import os
import sys
from typing import Dict, Optional, Set

from loguru import logger

from VectorSpaceSearch.config import load_config, resolve_path
from VectorSpaceSearch.log_setup import setup_logging
from VectorSpaceSearch.preprocessing.document import Document
from VectorSpaceSearch.preprocessing.preprocess import load_stop_words
from VectorSpaceSearch.vector_search import (
    DuplicateDocumentError,
    Index,
    SearchEngineError,
    SearchResults,
    build_index,
)


class VectorSpaceSearch:
    """
    Search session over one corpus.
    Loads documents and stop words, builds the index and remembers the last results.
    """
    def __init__(self, config: Optional[Dict] = None):
        self.config = config or load_config()
        self.documents: Dict[str, Document] = {}
        self.stop_words: Set[str] = set()
        self.index: Optional[Index] = None
        self.last_results = SearchResults.empty("no query executed yet")
        self.documents_loaded = False

    def load_documents(self, documents_path: str) -> bool:
        """
        Load documents from a directory or a JSON file.

        Every regular file in a directory is one document identified by its
        absolute path. A JSON file must hold a list of objects with "id",
        "title" and "text" fields.

        Args:
            documents_path: Directory or JSON file

        Returns:
            bool: True if loading was successful, False otherwise
        """
        encoding = self.config["documents"]["encoding"]
        try:
            logger.info("Loading documents from: {}", documents_path)
            if os.path.isdir(documents_path):
                documents = self._read_directory(documents_path, encoding)
            else:
                documents = self._read_json(documents_path, encoding)
        except (OSError, ValueError) as e:
            logger.error("Error loading documents: {}", e)
            return False

        self.documents = documents
        self.documents_loaded = True
        self.index = None
        logger.info("Loaded {} documents.", len(self.documents))
        return True

    @staticmethod
    def _read_directory(directory: str, encoding: str) -> Dict[str, Document]:
        documents = {}
        for name in sorted(os.listdir(directory)):
            path = os.path.abspath(os.path.join(directory, name))
            if not os.path.isfile(path):
                continue
            # Undecodable bytes become U+FFFD
            with open(path, "r", encoding=encoding, errors="replace") as f:
                documents[path] = Document(path, f.read(), path=path)
        return documents

    @staticmethod
    def _read_json(documents_path: str, encoding: str) -> Dict[str, Document]:
        with open(documents_path, "r", encoding=encoding) as f:
            doc_list = json.load(f)
        if not isinstance(doc_list, list):
            raise ValueError(f"{documents_path} must contain a list of documents")

        documents = {}
        for i, doc_data in enumerate(doc_list):
            if not isinstance(doc_data, dict):
                raise ValueError(f"Document {i} in {documents_path} is not an object")
            doc_id = str(doc_data.get("id", i))
            if doc_id in documents:
                raise DuplicateDocumentError(f"Duplicate document identifier: {doc_id}")
            documents[doc_id] = Document(
                doc_id,
                doc_data.get("text", doc_data.get("content", "")),
                title=doc_data.get("title", ""),
                metadata={key: value for key, value in doc_data.items()
                          if key not in ("id", "title", "text", "content")},
            )
        return documents

    def load_stop_words(self, stop_words_path: Optional[str] = None) -> bool:
        """
        Load stop words from a file, by default the one named in the config.

        Returns:
            bool: True if loading was successful, False otherwise
        """
        stop_words_config = self.config["preprocessing"]["stop_words"]
        path = resolve_path(stop_words_path or stop_words_config["path"])
        try:
            self.stop_words = load_stop_words(path, stop_words_config.get("encoding", "utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Error loading stop words: {}", e)
            return False
        self.index = None
        return True

    def init_index(self) -> bool:
        """
        Build the vector-space index from the loaded documents.

        Returns:
            bool: True if the index was built, False otherwise
        """
        if not self.documents_loaded:
            logger.error("No documents loaded. Load documents first.")
            return False

        search_config = self.config["search"]
        try:
            self.index = build_index(
                ((doc_id, document.combined_text) for doc_id, document in self.documents.items()),
                stop_words=self.stop_words,
                similarity_threshold=search_config["similarity_threshold"],
                max_results=search_config["max_results"],
            )
        except SearchEngineError as e:
            logger.error("Error building index: {}", e)
            return False

        return True

    def vocabulary_size(self) -> int:
        return self.index.vocabulary_size() if self.index else 0

    def search(self, query: str, top_k: Optional[int] = None) -> SearchResults:
        """
        Search the index and remember the results.

        Args:
            query: Free-text query string
            top_k: Maximum number of results to return

        Returns:
            SearchResults
        """
        if not self.index:
            logger.error("Index not initialized.")
            return SearchResults.empty("index not initialized")

        self.last_results = self.index.query(query, max_results=top_k)
        return self.last_results

    def results(self) -> SearchResults:
        return self.last_results

    def get_result_document(self, rank: int) -> Document:
        """
        Get the document shown at the given rank of the last results.

        Args:
            rank: 1-based rank

        Raises:
            LookupError: If there are no results
            IndexError: If the rank is out of range
        """
        if not self.last_results:
            raise LookupError("No results.")
        if rank < 1 or rank > len(self.last_results):
            raise IndexError(f"Invalid index: {rank}")
        return self.documents[self.last_results[rank - 1].identifier]


def display_results(results: SearchResults):
    """Display search results in the [rank] (similarity) identifier format"""
    if results.no_results:
        print("No results.")
        return

    print(f"Query is: [{', '.join(results.query_terms)}].")
    print("Best results:")
    for result in results:
        print(f"[{result.rank}] ({result.similarity:.4f}) {result.identifier}")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def main():
    # Parse command-line arguments
    parser = argparse.ArgumentParser(
        description='VectorSpaceSearch - TF-IDF vector-space search engine'
    )
    parser.add_argument('--documents', required=True,
                        help='Directory of text documents or a documents JSON file')
    parser.add_argument('--stop-words', help='Stop words file (one word per line or JSON list)')
    parser.add_argument('--config', help='Path to a config JSON file')
    parser.add_argument('--query', action='append', default=[],
                        help='Query string to search for (can be repeated)')
    parser.add_argument('--top', type=positive_int, help='Number of top results to display')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args()

    config = load_config(args.config)
    setup_logging("DEBUG" if args.debug else config["logging"]["level"])

    retriever = VectorSpaceSearch(config)

    if not retriever.load_documents(args.documents):
        sys.exit(1)

    if args.stop_words or config["preprocessing"]["stop_words"]["use"]:
        if not retriever.load_stop_words(args.stop_words):
            sys.exit(1)

    if not retriever.init_index():
        sys.exit(1)

    print(f"The size of the dictionary is: {retriever.vocabulary_size()}")

    for query in args.query:
        display_results(retriever.search(query, args.top))


if __name__ == "__main__":
    main()
