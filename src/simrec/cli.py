"""
Command-line entry points.

    simrec-content  <document_file> <stop_words_file> <lemmatization_file>
    simrec-ratings  <filename> <metric> <k> <predictionType> [output_file]
    simrec-evaluate <filename> <k> [plot_file]

Every tool exits with status 1 on bad arguments or unreadable input.
"""

import sys

from simrec import config
from simrec.content_based import ContentBasedModel
from simrec.data_loader import (
    format_utility_matrix,
    load_utility_matrix,
    read_documents,
    read_lemmatization,
    read_stop_words,
    write_utility_matrix,
)
from simrec.evaluation import compare_configurations, plot_error_distribution
from simrec.UBCF.similarity_user import SIMILARITY_METRICS
from simrec.UBCF.user_based_cf import PREDICTION_TYPES, UserBasedCF


CONTENT_USAGE = "Usage: {prog} <document_file> <stop_words_file> <lemmatization_file>"

RATINGS_USAGE = (
    "Usage: {prog} <filename> <metric> <k> <predictionType> [output_file]\n"
    f"<metric> - {'/'.join(SIMILARITY_METRICS)}\n"
    "<k> - number of neighbors\n"
    f"<predictionType> - {'/'.join(PREDICTION_TYPES)}"
)

EVALUATE_USAGE = "Usage: {prog} <filename> <k> [plot_file]"


def _fail(message):
    print(message, file=sys.stderr)
    return 1


def _parse_k(value):
    k = int(value)
    if k < 0:
        raise ValueError(f"k must be a non-negative integer, got {value!r}")
    return k


# ------------------------------------------------------
# Content similarity
# ------------------------------------------------------
def format_document_report(model, decimals=config.OUTPUT_DECIMALS):
    """Per-document table of index, term, TF, IDF and TF-IDF."""
    lines = []
    for doc_index in range(len(model.documents)):
        lines.append(f"Document {doc_index + 1}:")
        lines.append("Index\tTerm\t\tTF\t\tIDF\t\tTF-IDF")
        table = model.document_table(doc_index)
        for term_index, row in enumerate(table.itertuples(index=False)):
            lines.append(
                f"{term_index}\t{row.term}\t\t{row.tf:.{decimals}f}"
                f"\t\t{row.idf:.{decimals}f}\t\t{row.tfidf:.{decimals}f}"
            )
        lines.append("")
    return "\n".join(lines) + "\n"


def content_main(argv=None):
    argv = sys.argv if argv is None else argv
    prog = argv[0] if argv else "simrec-content"

    if len(argv) != 4:
        return _fail(CONTENT_USAGE.format(prog=prog))

    document_file, stop_words_file, lemmatization_file = argv[1:4]

    try:
        documents = read_documents(document_file)
    except (OSError, UnicodeDecodeError) as e:
        return _fail(f"Error: could not read documents file {document_file}: {e}")
    try:
        stop_words = read_stop_words(stop_words_file)
    except (OSError, UnicodeDecodeError) as e:
        return _fail(f"Error: could not read stop words file {stop_words_file}: {e}")
    try:
        lemmas = read_lemmatization(lemmatization_file)
    except (OSError, UnicodeDecodeError) as e:
        return _fail(f"Error: could not read lemmatization file {lemmatization_file}: {e}")

    if config.VERBOSE:
        print(f"[INFO] {len(documents)} documents, {len(stop_words)} stop words, "
              f"{len(lemmas)} lemmas", file=sys.stderr)

    model = ContentBasedModel(documents)
    sys.stdout.write(format_document_report(model))
    return 0


# ------------------------------------------------------
# Rating prediction
# ------------------------------------------------------
def format_prediction_report(predictions):
    """One line per filled cell: its neighbors and the predicted rating."""
    lines = []
    for (uid, item), (neighbors, pred) in predictions.items():
        neigh = ", ".join(f"{nid}:{sim:.{config.OUTPUT_DECIMALS}f}" for nid, sim in neighbors)
        lines.append(
            f"user {uid} item {item} -> {pred:.{config.OUTPUT_DECIMALS}f} (neighbors: {neigh or 'none'})"
        )
    return "\n".join(lines) + ("\n" if lines else "")


def ratings_main(argv=None):
    argv = sys.argv if argv is None else argv
    prog = argv[0] if argv else "simrec-ratings"

    if len(argv) not in (5, 6):
        return _fail(RATINGS_USAGE.format(prog=prog))

    filename, metric, k, prediction = argv[1:5]
    output_file = argv[5] if len(argv) == 6 else None

    try:
        R, _, _ = load_utility_matrix(filename)
    except (OSError, UnicodeDecodeError) as e:
        return _fail(f"Could not open the file {filename}: {e}")
    except ValueError as e:
        return _fail(f"Malformed utility matrix {filename}: {e}")

    try:
        model = UserBasedCF(R, metric=metric, k=_parse_k(k), prediction=prediction)
    except ValueError as e:
        return _fail(f"{e}\n" + RATINGS_USAGE.format(prog=prog))

    predictions = model.predict_missing()
    filled = model.fill_missing(predictions)

    if output_file is None:
        sys.stdout.write(format_utility_matrix(filled))
        sys.stdout.write("\n" + format_prediction_report(predictions))
        return 0

    try:
        write_utility_matrix(filled, output_file)
    except OSError as e:
        return _fail(f"Could not open the file {output_file}: {e}")
    sys.stdout.write(format_prediction_report(predictions))
    return 0


# ------------------------------------------------------
# Evaluation
# ------------------------------------------------------
def evaluate_main(argv=None):
    argv = sys.argv if argv is None else argv
    prog = argv[0] if argv else "simrec-evaluate"

    if len(argv) not in (3, 4):
        return _fail(EVALUATE_USAGE.format(prog=prog))

    filename = argv[1]
    try:
        k = _parse_k(argv[2])
    except ValueError as e:
        return _fail(f"{e}\n" + EVALUATE_USAGE.format(prog=prog))

    try:
        R, _, _ = load_utility_matrix(filename)
    except (OSError, UnicodeDecodeError) as e:
        return _fail(f"Could not open the file {filename}: {e}")
    except ValueError as e:
        return _fail(f"Malformed utility matrix {filename}: {e}")

    results = compare_configurations(R, k)

    print(f"{'Metric':<12} {'Prediction':<12} {'RMSE':>8} {'MAE':>8} {'Coverage':>10}")
    for (metric, prediction), res in results.items():
        print(f"{metric:<12} {prediction:<12} {res['rmse']:>8.4f} {res['mae']:>8.4f} "
              f"{res['coverage']:>10.2%}")

    if len(argv) == 4:
        plot_error_distribution(results, argv[3])
        print(f"\nSaved error distribution to '{argv[3]}'")
    return 0
