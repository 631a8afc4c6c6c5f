import pytest

from simrec.cli import content_main, evaluate_main, ratings_main


@pytest.fixture
def content_files(tmp_path):
    docs = tmp_path / "docs.txt"
    docs.write_text("a b a\nb c\n", encoding="utf-8")
    stop = tmp_path / "stop.txt"
    stop.write_text("a the\n", encoding="utf-8")
    lemmas = tmp_path / "lemmas.txt"
    lemmas.write_text("b bee\n", encoding="utf-8")
    return str(docs), str(stop), str(lemmas)


def test_content_report(content_files, capsys):
    assert content_main(["simrec-content", *content_files]) == 0
    out = capsys.readouterr().out

    assert out.startswith("Document 1:\nIndex\tTerm\t\tTF\t\tIDF\t\tTF-IDF\n")
    assert "0\ta\t\t0.6667\t\t0.6931\t\t0.4621\n" in out
    assert "1\tb\t\t0.3333\t\t0.0000\t\t0.0000\n" in out
    assert "Document 2:" in out
    assert "1\tc\t\t0.5000\t\t0.6931\t\t0.3466\n" in out


def test_content_stop_words_are_not_applied(content_files, capsys):
    content_main(["simrec-content", *content_files])
    assert "\ta\t\t" in capsys.readouterr().out


def test_content_usage(capsys):
    assert content_main(["simrec-content", "docs.txt"]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_content_missing_file(tmp_path, content_files, capsys):
    _, stop, lemmas = content_files
    assert content_main(["simrec-content", str(tmp_path / "missing.txt"), stop, lemmas]) == 1
    assert "could not read documents file" in capsys.readouterr().err


def test_ratings_prints_filled_matrix(example_matrix_file, capsys):
    assert ratings_main(["simrec-ratings", str(example_matrix_file), "cosine", "2", "simple"]) == 0
    out = capsys.readouterr().out

    assert out.startswith("5 3 3.5\n4 3.5 2\n4.5 4 5\n")
    assert "user 0 item 2 -> 3.5000" in out


def test_ratings_keeps_dash_for_undefined_predictions(example_matrix_file, capsys):
    assert ratings_main(["simrec-ratings", str(example_matrix_file), "pearson", "2", "simple"]) == 0
    assert capsys.readouterr().out.startswith("5 3 -\n4 - 2\n- 4 5\n")


def test_ratings_writes_output_file(example_matrix_file, tmp_path):
    out = tmp_path / "filled.txt"
    argv = ["simrec-ratings", str(example_matrix_file), "cosine", "2", "simple", str(out)]
    assert ratings_main(argv) == 0
    assert out.read_text(encoding="utf-8") == "5 3 3.5\n4 3.5 2\n4.5 4 5\n"


@pytest.mark.parametrize(
    "args, message",
    [
        (["cosine", "2"], "Usage:"),
        (["manhattan", "2", "simple"], "Invalid metric"),
        (["cosine", "2", "median"], "Invalid prediction type"),
        (["cosine", "two", "simple"], "Usage:"),
        (["cosine", "-1", "simple"], "non-negative"),
    ],
)
def test_ratings_bad_arguments(example_matrix_file, capsys, args, message):
    assert ratings_main(["simrec-ratings", str(example_matrix_file), *args]) == 1
    assert message in capsys.readouterr().err


def test_ratings_missing_file(tmp_path, capsys):
    argv = ["simrec-ratings", str(tmp_path / "missing.txt"), "cosine", "2", "simple"]
    assert ratings_main(argv) == 1
    assert "Could not open the file" in capsys.readouterr().err


def test_evaluate(example_matrix_file, tmp_path, capsys):
    plot = tmp_path / "errors.png"
    assert evaluate_main(["simrec-evaluate", str(example_matrix_file), "2", str(plot)]) == 0

    out = capsys.readouterr().out
    assert "RMSE" in out
    assert "cosine" in out and "euclidean" in out
    assert plot.exists()


def test_evaluate_usage(capsys):
    assert evaluate_main(["simrec-evaluate"]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_content_undecodable_documents_file(tmp_path, content_files, capsys):
    _, stop, lemmas = content_files
    docs = tmp_path / "latin1.txt"
    docs.write_bytes(b"caf\xe9 b\n")

    assert content_main(["simrec-content", str(docs), stop, lemmas]) == 1
    assert "could not read documents file" in capsys.readouterr().err


def test_content_undecodable_stop_words_file(tmp_path, content_files, capsys):
    docs, _, lemmas = content_files
    stop = tmp_path / "stop_latin1.txt"
    stop.write_bytes(b"\xe9l la\n")

    assert content_main(["simrec-content", docs, str(stop), lemmas]) == 1
    assert "could not read stop words file" in capsys.readouterr().err


def test_ratings_undecodable_file(tmp_path, capsys):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1\n5\n5 \xe9\n")

    assert ratings_main(["simrec-ratings", str(path), "cosine", "2", "simple"]) == 1
    assert "Could not open the file" in capsys.readouterr().err


def test_ratings_rejects_non_finite_rating(tmp_path, capsys):
    path = tmp_path / "inf.txt"
    path.write_text("1\n5\n5 inf\n3 4\n", encoding="utf-8")

    assert ratings_main(["simrec-ratings", str(path), "cosine", "2", "simple"]) == 1
    assert "Malformed utility matrix" in capsys.readouterr().err
