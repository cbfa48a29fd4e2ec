import numpy as np
import pandas as pd
import sklearn.metrics

from constants import Constants
from errors import LengthMismatchError


def strip_start_markers(tags, start_pos=Constants.START_POS):
    return [tag for tag in tags if tag != start_pos]


def check_lengths(predicted, gold):
    if len(predicted) != len(gold):
        raise LengthMismatchError(len(predicted), len(gold))


def accuracy(predicted, gold):
    """Fraction of positions where the predicted tag equals the gold tag."""
    check_lengths(predicted, gold)
    if len(gold) == 0:
        return 0.0
    return float(np.mean(np.asarray(predicted, dtype=object) == np.asarray(gold, dtype=object)))


def error_rates(words, gold, predicted, known_words):
    """(known, unknown, overall) error rates, split on whether a word was seen in training."""
    check_lengths(predicted, gold)
    check_lengths(words, gold)
    df = pd.DataFrame({"name": list(words), "tag": list(gold), "predicted_tag": list(predicted)})
    if df.empty:
        return 0.0, 0.0, 0.0

    df["is_known"] = df["name"].isin(set(known_words))
    df["correct"] = df["tag"] == df["predicted_tag"]

    known_df = df[df["is_known"]]
    unknown_df = df[~df["is_known"]]
    known_accuracy = known_df["correct"].mean() if len(known_df) > 0 else 1
    unknown_accuracy = unknown_df["correct"].mean() if len(unknown_df) > 0 else 1
    overall_accuracy = df["correct"].mean()

    return float(1 - known_accuracy), float(1 - unknown_accuracy), float(1 - overall_accuracy)


def most_confused_tags(gold, predicted):
    """Maps each gold tag to the tag it is most often mistaken for (None if never wrong)."""
    check_lengths(predicted, gold)
    tags = np.unique(np.asarray(list(gold) + list(predicted), dtype=str))
    if tags.size == 0:
        return {}
    confusion_mat = sklearn.metrics.confusion_matrix(list(gold), list(predicted), labels=tags)
    np.fill_diagonal(confusion_mat, 0)
    max_err_tags = confusion_mat.argmax(1)

    confused = {}
    for i, tag in enumerate(tags):
        if tag not in gold:
            continue
        confused[str(tag)] = str(tags[max_err_tags[i]]) if confusion_mat[i].max() > 0 else None
    return confused


def report(predicted, gold):
    acc = accuracy(predicted, gold)
    correct = int(round(acc * len(gold)))
    print(f"The tagger got a total of {correct} tags correct out of {len(gold)} total, "
          f"with an accuracy of {acc * 100:.2f}%")
    return acc
