"""Shared fixtures for the search engine tests."""

import pytest

from VectorSpaceSearch.vector_search import build_index


@pytest.fixture
def animal_corpus():
    return [("doc1", "cat dog cat"), ("doc2", "dog bird")]


@pytest.fixture
def animal_index(animal_corpus):
    return build_index(animal_corpus)


@pytest.fixture
def corpus_dir(tmp_path):
    """A directory with one text file per document."""
    directory = tmp_path / "corpus"
    directory.mkdir()
    (directory / "cats.txt").write_text("The cat sat on the mat. Cats chase mice!", encoding="utf-8")
    (directory / "dogs.txt").write_text("A dog barks at the cat; dogs like bones.", encoding="utf-8")
    (directory / "birds.txt").write_text("Birds sing in the morning, 42 of them.", encoding="utf-8")
    return directory


@pytest.fixture
def stop_words_file(tmp_path):
    path = tmp_path / "stopwords.txt"
    path.write_text("the\n\nA\non\nat\nin\nof\n", encoding="utf-8")
    return path
