import importlib.util
import json
import os
import sys

import pytest

from VectorSpaceSearch.config import DEFAULT_CONFIG, load_config, resolve_path
from VectorSpaceSearch.main import VectorSpaceSearch, main


@pytest.fixture
def retriever():
    return VectorSpaceSearch(load_config())


@pytest.fixture
def loaded_retriever(retriever, corpus_dir, stop_words_file):
    assert retriever.load_documents(str(corpus_dir))
    assert retriever.load_stop_words(str(stop_words_file))
    assert retriever.init_index()
    return retriever


def test_load_documents_from_directory(retriever, corpus_dir):
    assert retriever.load_documents(str(corpus_dir))
    assert list(retriever.documents) == [
        os.path.abspath(str(corpus_dir / name)) for name in ("birds.txt", "cats.txt", "dogs.txt")
    ]
    document = retriever.documents[os.path.abspath(str(corpus_dir / "cats.txt"))]
    assert document.text.startswith("The cat sat")


def test_load_documents_skips_subdirectories(retriever, corpus_dir):
    (corpus_dir / "nested").mkdir()
    assert retriever.load_documents(str(corpus_dir))
    assert len(retriever.documents) == 3


def test_load_documents_from_json(retriever, tmp_path):
    path = tmp_path / "documents.json"
    path.write_text(json.dumps([
        {"id": "x1", "title": "Tigers", "text": "Large striped cats", "year": 2020},
        {"title": "Lions", "text": "Cats with manes"},
    ]), encoding="utf-8")

    assert retriever.load_documents(str(path))
    assert list(retriever.documents) == ["x1", "1"]
    assert retriever.documents["x1"].metadata == {"year": 2020}
    assert retriever.init_index()
    assert [result.identifier for result in retriever.search("tigers")] == ["x1"]


def test_load_documents_with_undecodable_file(retriever, corpus_dir):
    latin = corpus_dir / "latin.txt"
    latin.write_bytes("Caf\u00e9 cr\u00e8me".encode("latin-1"))

    assert retriever.load_documents(str(corpus_dir))
    assert len(retriever.documents) == 4
    assert "\ufffd" in retriever.documents[os.path.abspath(str(latin))].text
    assert retriever.init_index()
    assert [result.identifier for result in retriever.search("caf")] == [os.path.abspath(str(latin))]


def test_load_documents_json_entry_not_an_object(retriever, tmp_path):
    path = tmp_path / "documents.json"
    path.write_text(json.dumps([{"id": "a", "text": "cat"}, "just a string"]), encoding="utf-8")
    assert not retriever.load_documents(str(path))
    assert not retriever.documents_loaded


def test_load_documents_json_duplicate_ids(retriever, tmp_path):
    path = tmp_path / "documents.json"
    path.write_text(json.dumps([{"id": 1, "text": "cat"}, {"id": "1", "text": "dog"}]), encoding="utf-8")
    assert not retriever.load_documents(str(path))
    assert not retriever.documents_loaded
    assert retriever.documents == {}


def test_load_documents_missing_path(retriever, tmp_path):
    assert not retriever.load_documents(str(tmp_path / "missing.json"))
    assert not retriever.documents_loaded


def test_load_documents_invalid_json(retriever, tmp_path):
    path = tmp_path / "documents.json"
    path.write_text('{"id": 1}', encoding="utf-8")
    assert not retriever.load_documents(str(path))


def test_init_index_requires_documents(retriever):
    assert not retriever.init_index()


def test_init_index_fails_for_empty_corpus(retriever, tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    assert retriever.load_documents(str(empty))
    assert not retriever.init_index()
    assert retriever.index is None


def test_default_stop_words(retriever):
    assert retriever.load_stop_words()
    assert "što" in retriever.stop_words


def test_missing_stop_words_file(retriever, tmp_path):
    assert not retriever.load_stop_words(str(tmp_path / "missing.txt"))


def test_vocabulary_size(loaded_retriever):
    assert loaded_retriever.vocabulary_size() == 15


def test_vocabulary_size_without_stop_words(retriever, corpus_dir):
    retriever.load_documents(str(corpus_dir))
    retriever.init_index()
    assert retriever.vocabulary_size() == 21


def test_search_and_results(loaded_retriever, corpus_dir):
    results = loaded_retriever.search("Cat")
    assert [result.identifier for result in results] == [
        os.path.abspath(str(corpus_dir / "cats.txt")),
        os.path.abspath(str(corpus_dir / "dogs.txt")),
    ]
    assert loaded_retriever.results() is results


def test_get_result_document(loaded_retriever):
    loaded_retriever.search("mice")
    document = loaded_retriever.get_result_document(1)
    assert "Cats chase mice" in document.text

    with pytest.raises(IndexError):
        loaded_retriever.get_result_document(2)
    with pytest.raises(IndexError):
        loaded_retriever.get_result_document(0)


def test_get_result_document_without_results(loaded_retriever):
    with pytest.raises(LookupError):
        loaded_retriever.get_result_document(1)
    loaded_retriever.search("zebra")
    with pytest.raises(LookupError):
        loaded_retriever.get_result_document(1)


def test_search_without_index(retriever):
    results = retriever.search("cat")
    assert results.no_results
    assert results.reason == "index not initialized"


def test_load_config_defaults(tmp_path):
    assert load_config(str(tmp_path / "missing.json")) == DEFAULT_CONFIG


def test_load_config_merges_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"search": {"max_results": 3}}), encoding="utf-8")
    config = load_config(str(path))
    assert config["search"]["max_results"] == 3
    assert config["search"]["similarity_threshold"] == 1e-3
    assert config["logging"]["level"] == "INFO"


def test_load_config_invalid_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_packaged_config_matches_defaults():
    assert load_config() == DEFAULT_CONFIG


def test_resolve_path_falls_back_to_package(tmp_path):
    assert os.path.exists(resolve_path("preprocessing/data/stopwords-hr.txt"))
    absolute = str(tmp_path / "x.txt")
    assert resolve_path(absolute) == absolute


def test_main_prints_results(monkeypatch, capsys, corpus_dir, stop_words_file):
    monkeypatch.setattr(sys, "argv", [
        "main", "--documents", str(corpus_dir), "--stop-words", str(stop_words_file),
        "--query", "mice", "--query", "zebra",
    ])
    main()
    output = capsys.readouterr().out
    assert "The size of the dictionary is: 15" in output
    assert "Query is: [mice]." in output
    assert "[1] (" in output
    assert "cats.txt" in output
    assert "No results." in output


def test_main_exits_for_missing_documents(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", ["main", "--documents", str(tmp_path / "missing")])
    with pytest.raises(SystemExit):
        main()


@pytest.mark.parametrize("top", ["0", "-3"])
def test_main_rejects_top_below_one(monkeypatch, capsys, corpus_dir, top):
    monkeypatch.setattr(sys, "argv", ["main", "--documents", str(corpus_dir), "--query", "cat", "--top", top])
    with pytest.raises(SystemExit):
        main()
    assert "must be at least 1" in capsys.readouterr().err


def test_root_entry_point_runs_one_shot_main():
    path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "main.py")
    spec = importlib.util.spec_from_file_location("entry_point", path)
    entry_point = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(entry_point)
    assert entry_point.main is main
